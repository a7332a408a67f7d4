# ABOUTME: Shared in-memory unified config guarded by a reader/writer lock
# ABOUTME: Many concurrent readers or one exclusive writer, never both
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from ccswitch.config import ConfigStore
from ccswitch.models import UnifiedConfig

logger = logging.getLogger(__name__)


class RWLock:
    """Reader/writer lock built on threading.Condition.

    ABOUTME: Writer preference - a waiting writer blocks new readers
    ABOUTME: Not reentrant: taking write() while holding read() on the same thread deadlocks
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer_active = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer_active or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read called with no active readers")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer_active or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer_active = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer_active:
                raise RuntimeError("release_write called with no active writer")
            self._writer_active = False
            self._cond.notify_all()

    @contextmanager
    def read_lock(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_lock(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class AppState:
    """Unified config held for the duration of a command or session.

    ABOUTME: read() for status displays, write() for every mutating operation
    ABOUTME: persist() must be called while holding write()

    Examples:
        >>> state = AppState.load()
        >>> with state.write() as config:
        ...     config.mcp.servers.clear()
        ...     state.persist()
    """

    def __init__(self, config: UnifiedConfig, store: ConfigStore) -> None:
        self._config = config
        self.store = store
        self.lock = RWLock()

    @classmethod
    def load(cls, store: ConfigStore | None = None) -> "AppState":
        """Load the unified store into a new state object."""
        store = store if store else ConfigStore()
        return cls(store.load(), store)

    @contextmanager
    def read(self) -> Iterator[UnifiedConfig]:
        with self.lock.read_lock():
            yield self._config

    @contextmanager
    def write(self) -> Iterator[UnifiedConfig]:
        with self.lock.write_lock():
            yield self._config

    def persist(self) -> None:
        """Save the in-memory config back to the store."""
        self.store.save(self._config)

    def replace(self, config: UnifiedConfig) -> None:
        """Swap in a new config object (caller holds write())."""
        self._config = config

    def reload(self) -> None:
        """Re-read the store from disk, replacing the in-memory config."""
        with self.lock.write_lock():
            self._config = self.store.load()
        logger.debug(f"Reloaded config from {self.store.path}")
