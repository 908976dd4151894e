# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - BLOB REDIRECT
# STATUS: Core module initialization
# PURPOSE: Export path contracts and storage error categories
# CREATED: 19 OCT 2026
# ============================================================================

from core.contracts import BlobPath, InvalidPathError, StorageErrorKind, split_path

__all__ = [
    "BlobPath",
    "InvalidPathError",
    "StorageErrorKind",
    "split_path",
]
