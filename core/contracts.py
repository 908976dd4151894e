# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - BLOB REDIRECT
# STATUS: Foundation - Request path contract and storage error categories
# PURPOSE: Split logical file paths and name the ways signing can fail
# CREATED: 19 OCT 2026
# EXPORTS: BlobPath, InvalidPathError, StorageErrorKind, split_path
# DEPENDENCIES: enum, pydantic
# ============================================================================
"""
Base contracts for the blob redirect function.

A request path looks like "container/sub/dir/file.pdf". It is split once on
the LAST separator:

    filepath = "container/sub/dir"   (container + optional prefix)
    filename = "file.pdf"            (object name)

The storage SDK wants a bare container name, so BlobPath also exposes
container_name ("container") and blob_name ("sub/dir/file.pdf"). Both
addressings produce the same canonical blob URI.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

PATH_SEPARATOR = "/"


# ============================================================================
# ERRORS
# ============================================================================

class InvalidPathError(ValueError):
    """Raised when a request path cannot be split into container and object."""


class StorageErrorKind(str, Enum):
    """
    Categories of storage backend failure.

    The redirect handler maps each category to its own HTTP status.
    """
    AUTHENTICATION = "authentication"   # Credential rejected by the account
    NOT_FOUND = "not_found"             # Account or resource does not exist
    NETWORK = "network"                 # Transport failure talking to the backend
    CONFIGURATION = "configuration"     # Connection string unusable for signing
    UNKNOWN = "unknown"


# ============================================================================
# REQUEST PATH
# ============================================================================

class BlobPath(BaseModel):
    """A request path split into container part and object name."""

    model_config = ConfigDict(frozen=True)

    filepath: str = Field(..., min_length=1, description="Container plus optional prefix")
    filename: str = Field(..., min_length=1, description="Object name")

    @property
    def container_name(self) -> str:
        """First segment of filepath."""
        return self.filepath.split(PATH_SEPARATOR, 1)[0]

    @property
    def blob_name(self) -> str:
        """Object name relative to the container, prefix included."""
        parts = self.filepath.split(PATH_SEPARATOR, 1)
        if len(parts) == 1:
            return self.filename
        return f"{parts[1]}{PATH_SEPARATOR}{self.filename}"

    def __str__(self) -> str:
        return f"{self.filepath}{PATH_SEPARATOR}{self.filename}"


def split_path(path: str) -> BlobPath:
    """
    Split a request path on its last separator.

    Both halves are trimmed of surrounding whitespace.

    Raises:
        InvalidPathError: no separator, blank container segment, or empty file name.
    """
    index = path.rfind(PATH_SEPARATOR)
    if index < 0:
        raise InvalidPathError(
            f"Path '{path}' has no '{PATH_SEPARATOR}' separator; "
            f"expected <container>/<file>"
        )

    filepath = path[:index].strip()
    filename = path[index + 1:].strip()

    if not filepath or not filepath.split(PATH_SEPARATOR, 1)[0].strip():
        raise InvalidPathError(f"Path '{path}' has no container before the first '{PATH_SEPARATOR}'")
    if not filename:
        raise InvalidPathError(f"Path '{path}' has no file name after the last '{PATH_SEPARATOR}'")

    return BlobPath(filepath=filepath, filename=filename)


__all__ = [
    "PATH_SEPARATOR",
    "BlobPath",
    "InvalidPathError",
    "StorageErrorKind",
    "split_path",
]
