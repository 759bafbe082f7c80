# src/heatsim_core/output/__init__.py
from .snapshot import SnapshotWriter, format_snapshot, parse_snapshot
from .exceptions import SnapshotWriteError

__all__ = [
    "SnapshotWriter",
    "format_snapshot",
    "parse_snapshot",
    # Exceptions
    "SnapshotWriteError",
]
