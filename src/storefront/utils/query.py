"""Helpers for reading complete result sets through Protean querysets."""

# Rows fetched per round trip when draining a queryset
BATCH_SIZE = 500


def fetch_all(queryset, start: int = 0) -> list:
    """Return every matching record from ``start`` on, paging past the queryset's default limit."""
    items = []
    offset = start
    while True:
        batch = queryset.limit(BATCH_SIZE).offset(offset).all().items
        items.extend(batch)
        if len(batch) < BATCH_SIZE:
            return items
        offset += BATCH_SIZE
