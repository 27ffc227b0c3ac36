"""
Resource wrapper owning a simulated unmanaged handle and a managed resource.

Release is deterministic through ``dispose()`` (or a ``with`` block). If the
wrapper is collected without being disposed, a ``weakref.finalize`` callback
frees the unmanaged handle only.
"""

from typing import Optional
import logging
import weakref

from .disposable import Disposable, ObjectDisposedError
from .handle import HandleTable, NULL_HANDLE, default_handle_table

logger = logging.getLogger(__name__)


class ManagedResource(Disposable):
    """A managed resource that only tracks whether it was released."""

    def __init__(self):
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if not self._disposed:
            self._disposed = True


class _WrapperState:
    """
    Release state shared between the wrapper and its finalizer.

    The finalizer holds this object rather than the wrapper, so the
    wrapper itself stays collectable.
    """

    __slots__ = ("handle_table", "handle", "inner", "released")

    def __init__(self, handle_table: HandleTable, handle: int, inner: ManagedResource):
        self.handle_table = handle_table
        self.handle = handle
        self.inner: Optional[ManagedResource] = inner
        self.released = False


class ResourceWrapper(Disposable):
    """
    Owns one unmanaged handle and one managed resource.

    Usage:
        with ResourceWrapper() as resource:
            resource.do_work()
    """

    def __init__(self, handle_table: Optional[HandleTable] = None):
        if handle_table is None:
            handle_table = default_handle_table
        self._state = _WrapperState(
            handle_table, handle_table.allocate(), ManagedResource()
        )
        self._finalizer = weakref.finalize(
            self, ResourceWrapper._finalize, self._state
        )
        logger.debug("Resource initialised (handle %#x)", self._state.handle)

    @property
    def released(self) -> bool:
        return self._state.released

    @property
    def handle(self) -> int:
        """The unmanaged handle, or NULL_HANDLE once released."""
        return self._state.handle

    @property
    def inner(self) -> Optional[ManagedResource]:
        """The owned managed resource, or None after an explicit release."""
        return self._state.inner

    def dispose(self) -> None:
        """
        Release both resources. Safe to call any number of times.

        Never raises. If freeing the handle fails, the failure is logged and
        the finalizer stays armed so a later dispose() or collection retries.
        """
        try:
            ResourceWrapper._release(self._state, disposing=True)
        except Exception:
            logger.exception("Failed to release resource")
            return
        # Explicit release makes the fallback unnecessary
        self._finalizer.detach()

    def do_work(self) -> None:
        """Run a business operation. Fails once the wrapper is released."""
        if self._state.released:
            raise ObjectDisposedError(
                "ResourceWrapper", "The object was released and cannot be used."
            )
        logger.debug("Doing work with handle %#x", self._state.handle)

    @staticmethod
    def _release(state: _WrapperState, disposing: bool) -> None:
        """
        Release logic shared by both paths.

        With disposing=True (explicit path) the managed resource is released
        as well. With disposing=False (finalizer path) only the unmanaged
        handle is freed, since other objects may already have been collected.
        """
        if state.released:
            return

        if disposing and state.inner is not None:
            state.inner.dispose()
            logger.debug("Managed resource released")
            state.inner = None

        if state.handle != NULL_HANDLE:
            state.handle_table.free(state.handle)
            logger.debug("Unmanaged resource released")
            state.handle = NULL_HANDLE

        state.released = True

    @staticmethod
    def _finalize(state: _WrapperState) -> None:
        try:
            ResourceWrapper._release(state, disposing=False)
        except Exception:
            logger.exception("Finalizer failed to release resource")
            return
        logger.debug("Finalizer released resource")

    def __repr__(self):
        status = "released" if self._state.released else f"handle={self._state.handle:#x}"
        return f"<ResourceWrapper {status}>"
