"""Email normalization and structural validation for user accounts."""

_FORBIDDEN_CHARACTERS = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def normalize_email(email: str) -> str:
    """Lower-case and trim; the result is the user's lookup key."""
    return (email or "").strip().lower()


def is_valid_email(email: str) -> bool:
    """Check the basic structure: one @, non-empty local and dotted domain parts."""
    if not email or any(ch.isspace() for ch in email):
        return False

    if email.count("@") != 1:
        return False

    local_part, domain_part = email.split("@", 1)

    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return False

    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        return False

    if "." not in domain_part or ".." in local_part or ".." in domain_part:
        return False

    for label in domain_part.split("."):
        if label.startswith("-") or label.endswith("-"):
            return False

    return not any(ch in email for ch in _FORBIDDEN_CHARACTERS)
