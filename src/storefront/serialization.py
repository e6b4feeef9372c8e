"""Per-user serialization of commands.

Every cart or order command is a read-modify-write of one user document.
Commands for the same key run one at a time inside this process; different
keys never wait on each other. Across processes, the repository's optimistic
version check rejects a stale write with ``ExpectedVersionError`` and the
whole command is replayed against fresh state.
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field

import structlog
from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain

from storefront.config import setting
from storefront.errors import ServiceUnavailable

logger = structlog.get_logger(__name__)


@dataclass
class _LockEntry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    waiters: int = 0


class KeyedLocks:
    """A registry of mutexes created on demand and dropped when idle."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[str, _LockEntry] = {}

    @contextmanager
    def hold(self, key: str):
        with self._guard:
            entry = self._entries.setdefault(key, _LockEntry())
            entry.waiters += 1

        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.waiters -= 1
                if entry.waiters == 0:
                    del self._entries[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)


user_locks = KeyedLocks()


def process_serialized(key, command):
    """Process ``command`` while holding the lock for ``key``.

    Version conflicts are retried up to ``VERSION_CONFLICT_RETRIES`` times,
    then surface as ``ServiceUnavailable``.
    """
    retries = setting("VERSION_CONFLICT_RETRIES")
    with user_locks.hold(str(key)):
        for attempt in range(retries + 1):
            try:
                return current_domain.process(command, asynchronous=False)
            except ExpectedVersionError as exc:
                logger.warning(
                    "Version conflict, retrying",
                    key=str(key),
                    command=command.__class__.__name__,
                    attempt=attempt + 1,
                    error=str(exc),
                )

    raise ServiceUnavailable(f"{command.__class__.__name__} kept conflicting with concurrent updates")
