"""
Base class for disposable resources.
"""

from abc import ABC, abstractmethod


class ObjectDisposedError(RuntimeError):
    """Raised when an operation is attempted on a released object."""

    def __init__(
        self,
        object_name: str,
        message: str = "Cannot perform the operation on a released object.",
    ):
        self.object_name = object_name
        super().__init__(
            f"Cannot access a disposed object: {object_name!r}. {message}"
        )


class Disposable(ABC):
    """Base class for resources that need explicit cleanup."""

    @abstractmethod
    def dispose(self) -> None:
        """Clean up resources."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.dispose()
