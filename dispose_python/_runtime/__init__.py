"""Runtime components for dispose-python."""

from .disposable import Disposable, ObjectDisposedError
from .handle import CountIdAllocator, HandleTable, NULL_HANDLE, default_handle_table
from .resource import ManagedResource, ResourceWrapper
from .temp_file import (
    CLOSED,
    CloseResult,
    TEMP_PREFIX,
    TEMP_SUFFIX,
    TemporaryFileStream,
    open_temp_file,
)

__all__ = [
    "Disposable",
    "ObjectDisposedError",
    "CountIdAllocator",
    "HandleTable",
    "NULL_HANDLE",
    "default_handle_table",
    "ManagedResource",
    "ResourceWrapper",
    "CLOSED",
    "CloseResult",
    "TEMP_PREFIX",
    "TEMP_SUFFIX",
    "TemporaryFileStream",
    "open_temp_file",
]
