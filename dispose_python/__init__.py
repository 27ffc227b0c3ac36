"""
dispose-python: deterministic-or-fallback resource release.

Usage:
    from dispose_python import ResourceWrapper, TemporaryFileStream

    with ResourceWrapper() as resource:
        resource.do_work()

    with TemporaryFileStream("a.txt") as tmp:
        tmp.write(b" ")
"""

from ._runtime import (
    Disposable,
    ObjectDisposedError,
    HandleTable,
    NULL_HANDLE,
    ManagedResource,
    ResourceWrapper,
    CloseResult,
    TemporaryFileStream,
)

__version__ = "0.1.0"

__all__ = [
    "Disposable",
    "ObjectDisposedError",
    "HandleTable",
    "NULL_HANDLE",
    "ManagedResource",
    "ResourceWrapper",
    "CloseResult",
    "TemporaryFileStream",
]
