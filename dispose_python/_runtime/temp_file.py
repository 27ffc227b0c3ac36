"""
Temporary file stream that deletes its file when closed.

The file is opened read/write as soon as the object is created. ``close()``
closes the stream and then deletes the file; deletion is best-effort and a
failure is reported in the returned ``CloseResult`` instead of raised. If the
object is collected without being closed, a ``weakref.finalize`` callback
performs the same cleanup and swallows any error.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Tuple, Union
import logging
import os
import tempfile
import weakref

from .disposable import Disposable, ObjectDisposedError

logger = logging.getLogger(__name__)

TEMP_PREFIX = "tmp"
TEMP_SUFFIX = ".tmp"

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class CloseResult:
    """
    Outcome of closing a temporary file.

    Closing always succeeds for the caller. ``warning`` holds the error
    raised while deleting the file, if any.
    """

    warning: Optional[OSError] = None

    @property
    def ok(self) -> bool:
        return self.warning is None


@dataclass
class _OpenState:
    """Stream and path of an open temporary file. Always set together."""

    stream: BinaryIO
    path: Path


class _Closed:
    """Singleton state of a closed temporary file."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "CLOSED"


CLOSED = _Closed()


def open_temp_file(
    dir: Optional[PathLike] = None,
    prefix: str = TEMP_PREFIX,
    suffix: str = TEMP_SUFFIX,
) -> Tuple[BinaryIO, Path]:
    """Create an empty file with a unique name; return it open read/write, and its path."""
    fd, name = tempfile.mkstemp(suffix=suffix, prefix=prefix, dir=dir)
    try:
        stream = os.fdopen(fd, "r+b")
    except BaseException:
        os.close(fd)
        raise
    return stream, Path(name)


def _open_read_write(path: Path) -> BinaryIO:
    """Open path for reading and writing, creating it if absent. Never truncates."""
    flags = os.O_RDWR | os.O_CREAT | getattr(os, "O_BINARY", 0)
    fd = os.open(path, flags, 0o666)
    try:
        return os.fdopen(fd, "r+b")
    except BaseException:
        os.close(fd)
        raise


def _delete_file(path: Path) -> Optional[OSError]:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Could not delete temporary file %s: %s", path, exc)
        return exc
    return None


def _close_state(state: _OpenState) -> CloseResult:
    # The stream goes first: an open handle can block deletion on Windows
    try:
        state.stream.close()
    finally:
        warning = _delete_file(state.path)
    logger.debug("Closed temporary file %s", state.path)
    return CloseResult(warning)


class TemporaryFileStream(Disposable):
    """
    A read/write binary stream over a file that is removed on close.

    Usage:
        with TemporaryFileStream() as tmp:
            tmp.write(b"data")
    """

    def __init__(
        self,
        path: Optional[PathLike] = None,
        *,
        dir: Optional[PathLike] = None,
        prefix: str = TEMP_PREFIX,
        suffix: str = TEMP_SUFFIX,
    ):
        if path is None:
            stream, resolved = open_temp_file(dir, prefix, suffix)
        else:
            resolved = Path(os.path.abspath(path))
            stream = _open_read_write(resolved)

        self._state: Union[_OpenState, _Closed] = _OpenState(stream, resolved)
        self._finalizer = weakref.finalize(
            self, TemporaryFileStream._finalize, self._state
        )
        logger.debug("Opened temporary file %s", resolved)

    @property
    def stream(self) -> Optional[BinaryIO]:
        """The open stream, or None after close."""
        if self._state is CLOSED:
            return None
        return self._state.stream

    @property
    def path(self) -> Optional[Path]:
        """Absolute path of the file, or None after close."""
        if self._state is CLOSED:
            return None
        return self._state.path

    @property
    def closed(self) -> bool:
        return self._state is CLOSED

    def close(self) -> CloseResult:
        """
        Close the stream and delete the file.

        A second call does nothing. Deletion errors are logged and returned
        in the result, never raised.
        """
        state = self._state
        if state is CLOSED:
            return CloseResult()
        self._finalizer.detach()
        self._state = CLOSED
        return _close_state(state)

    def dispose(self) -> None:
        self.close()

    def write(self, data: bytes) -> int:
        return self._require_open().stream.write(data)

    def read(self, size: int = -1) -> bytes:
        return self._require_open().stream.read(size)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return self._require_open().stream.seek(offset, whence)

    def flush(self) -> None:
        self._require_open().stream.flush()

    def _require_open(self) -> _OpenState:
        state = self._state
        if state is CLOSED:
            raise ObjectDisposedError(
                "TemporaryFileStream", "The file was closed and deleted."
            )
        return state

    @staticmethod
    def _finalize(state: _OpenState) -> None:
        # Nobody can observe an error here, so log it and carry on
        try:
            _close_state(state)
        except Exception:
            logger.exception("Finalizer failed to close temporary file %s", state.path)

    def __repr__(self):
        if self._state is CLOSED:
            return "<TemporaryFileStream closed>"
        return f"<TemporaryFileStream {self._state.path}>"
