"""Reader/writer lock for guarding shared in-memory state across threads."""
import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ReadWriteLock:
    """
    Many readers or one writer.

    Once a writer is waiting, new readers queue behind it, so a steady stream
    of reads cannot starve a write. When a writer releases, the readers already
    waiting at that moment are let in before the next writer, so a steady
    stream of writes cannot starve reads either. The lock is not reentrant.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._readers_waiting = 0
        self._writers_waiting = 0
        # Waiting readers admitted ahead of queued writers by the last write release
        self._read_grants = 0

    def acquire_read(self) -> None:
        """Block until the shared lock is held."""
        with self._cond:
            self._readers_waiting += 1
            try:
                while self._writer or (self._writers_waiting and not self._read_grants):
                    self._cond.wait()
            except BaseException:
                self._readers_waiting -= 1
                self._read_grants = min(self._read_grants, self._readers_waiting)
                self._cond.notify_all()
                raise
            self._readers_waiting -= 1
            if self._read_grants:
                self._read_grants -= 1
            self._readers += 1

    def release_read(self) -> None:
        """Release a shared hold."""
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a read hold")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        """Block until the exclusive lock is held."""
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers or self._read_grants:
                    self._cond.wait()
            except BaseException:
                self._writers_waiting -= 1
                # Readers may have been queued only behind this writer
                self._cond.notify_all()
                raise
            self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        """Release the exclusive hold."""
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called without a write hold")
            self._writer = False
            self._read_grants = self._readers_waiting
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """Hold the shared lock for the duration of the block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold the exclusive lock for the duration of the block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
