"""Errors that have no Protean counterpart.

Not-found, invalid-argument and invalid-state failures are signalled with
``ObjectNotFoundError``, ``ValidationError`` and ``InvalidOperationError``
from ``protean.exceptions``.
"""


class ServiceUnavailable(Exception):
    """A collaborator did not answer in time or kept conflicting. Safe to retry."""

    def __init__(self, message, retry_after=None):
        super().__init__(message)
        self.retry_after = retry_after
