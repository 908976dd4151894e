# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# EPOCH: 1 - BLOB REDIRECT
# STATUS: Infrastructure - Azure storage operations
# PURPOSE: SAS signing against Azure Blob Storage
# CREATED: 19 OCT 2026
# ============================================================================
"""
Infrastructure module for the blob redirect function.

Provides:
- BlobSasSigner: Account SAS generation and signed blob URLs
- SignedUrlResult: Success/failure value returned by the signer

Usage:
    from infrastructure import get_sas_signer

    result = get_sas_signer().get_blob_sas_url(
        container="orchestra-poc",
        blob_path="reports/file.pdf",
        timeout_seconds=300,
    )
"""

from infrastructure.storage import (
    BlobSasSigner,
    SignedUrlResult,
    classify_storage_error,
    get_sas_signer,
)

__all__ = [
    "BlobSasSigner",
    "SignedUrlResult",
    "classify_storage_error",
    "get_sas_signer",
]
