# ============================================================================
# BLOB STORAGE INFRASTRUCTURE
# ============================================================================
# EPOCH: 1 - BLOB REDIRECT
# STATUS: Infrastructure - Azure Blob Storage SAS signing
# PURPOSE: Mint read-only account SAS tokens and signed blob URLs
# CREATED: 19 OCT 2026
# ============================================================================
"""
Blob Storage Infrastructure

Provides BlobSasSigner for Azure Blob Storage:
- generate_sas_token: Account SAS scoped to read / blob service / object+container
- get_blob_sas_url: Canonical blob URI with a fresh SAS appended

Authentication uses the account connection string; the shared key it carries
signs tokens locally, so minting a SAS makes no network call. The blob does
not have to exist: existence is checked by the storage service when the
client follows the signed URL.

Failures never raise out of get_blob_sas_url. They come back as a
SignedUrlResult with a StorageErrorKind so callers can pick a status code.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from azure.core.exceptions import (
    ClientAuthenticationError,
    ResourceNotFoundError,
    ServiceRequestError,
    ServiceResponseError,
)
from azure.storage.blob import (
    AccountSasPermissions,
    BlobServiceClient,
    ResourceTypes,
    generate_account_sas,
)

from core.contracts import StorageErrorKind
from redirector.config import (
    DEFAULT_TOKEN_TIMEOUT_SECONDS,
    SAS_PERMISSION,
    SAS_RESOURCE_TYPES,
    SAS_SERVICES,
)

logger = logging.getLogger(__name__)


# ============================================================================
# RESULT
# ============================================================================

@dataclass
class SignedUrlResult:
    """Outcome of a signing request."""

    success: bool
    url: Optional[str] = None
    blob_uri: Optional[str] = None
    expires_at: Optional[datetime] = None
    error_kind: Optional[StorageErrorKind] = None
    error_message: Optional[str] = None

    @classmethod
    def failed(cls, kind: StorageErrorKind, message: str) -> "SignedUrlResult":
        return cls(success=False, error_kind=kind, error_message=message)


def classify_storage_error(error: Exception) -> StorageErrorKind:
    """Map an SDK exception to a StorageErrorKind."""
    if isinstance(error, ClientAuthenticationError):
        return StorageErrorKind.AUTHENTICATION
    if isinstance(error, ResourceNotFoundError):
        return StorageErrorKind.NOT_FOUND
    if isinstance(error, (ServiceRequestError, ServiceResponseError)):
        return StorageErrorKind.NETWORK
    if isinstance(error, ValueError):
        return StorageErrorKind.CONFIGURATION
    return StorageErrorKind.UNKNOWN


# ============================================================================
# SAS SIGNER
# ============================================================================

class BlobSasSigner:
    """
    Azure Blob Storage SAS signer bound to one storage account.

    Usage:
        signer = BlobSasSigner(connection_string=config.connection_string)

        result = signer.get_blob_sas_url(
            container="orchestra-poc",
            blob_path="reports/2023/file.pdf",
            timeout_seconds=300,
        )
        if result.success:
            redirect_to(result.url)
    """

    def __init__(self, connection_string: Optional[str]):
        self._connection_string = connection_string

        # Lazy initialization of Azure client
        self._blob_service: Optional[BlobServiceClient] = None

    # ========================================================================
    # AZURE CLIENT INITIALIZATION
    # ========================================================================

    def _get_blob_service(self) -> BlobServiceClient:
        """Get BlobServiceClient (lazy initialization)."""
        if self._blob_service is None:
            if not self._connection_string:
                raise ValueError("No storage connection string configured")
            self._blob_service = BlobServiceClient.from_connection_string(self._connection_string)
            logger.debug(f"BlobServiceClient initialized for {self._blob_service.account_name}")
        return self._blob_service

    @property
    def account_name(self) -> str:
        return self._get_blob_service().account_name

    def _get_account_key(self) -> str:
        """Shared key from the connection string; required for account SAS."""
        credential = self._get_blob_service().credential
        account_key = getattr(credential, "account_key", None)
        if not account_key:
            raise ValueError(
                "Connection string has no AccountKey; an account key is "
                "required to sign account SAS tokens"
            )
        return account_key

    def validate_credential(self) -> None:
        """
        Check the connection string parses and carries a shared key.

        Raises ValueError otherwise. No network call is made.
        """
        self._get_account_key()

    # ========================================================================
    # SAS GENERATION
    # ========================================================================

    def generate_sas_token(self, timeout_seconds: int = DEFAULT_TOKEN_TIMEOUT_SECONDS) -> str:
        """
        Generate an account SAS valid from now for timeout_seconds.

        Scope is fixed: read permission, blob service, object and
        container resource types. Every call signs afresh.

        Args:
            timeout_seconds: Token validity in seconds

        Returns:
            SAS query string (no leading '?')
        """
        token, _ = self._generate_sas_token(timeout_seconds)
        return token

    def _generate_sas_token(self, timeout_seconds: int):
        now = datetime.now(timezone.utc)
        expiry_time = now + timedelta(seconds=timeout_seconds)

        logger.info(f"Time Now: {now.strftime('%H:%M:%S')}")
        logger.info(f"Expire Time: {expiry_time.strftime('%H:%M:%S')}")

        sas_token = generate_account_sas(
            account_name=self.account_name,
            account_key=self._get_account_key(),
            resource_types=ResourceTypes.from_string(SAS_RESOURCE_TYPES),
            permission=AccountSasPermissions.from_string(SAS_PERMISSION),
            expiry=expiry_time,
            services=SAS_SERVICES,
        )
        return sas_token, expiry_time

    def get_blob_uri(self, container: str, blob_path: str) -> str:
        """Canonical (unsigned) URI of a blob. The blob need not exist."""
        blob_client = self._get_blob_service().get_blob_client(container=container, blob=blob_path)
        return blob_client.url

    def get_blob_sas_url(
        self,
        container: str,
        blob_path: str,
        timeout_seconds: int = DEFAULT_TOKEN_TIMEOUT_SECONDS,
    ) -> SignedUrlResult:
        """
        Build the signed URL for a blob.

        Args:
            container: Container name
            blob_path: Blob path within the container
            timeout_seconds: Token validity in seconds

        Returns:
            SignedUrlResult; on failure error_kind says what went wrong
        """
        try:
            blob_uri = self.get_blob_uri(container, blob_path)
            sas_token, expiry_time = self._generate_sas_token(timeout_seconds)
        except Exception as e:
            kind = classify_storage_error(e)
            logger.error(f"Failed to generate SAS URL for {container}/{blob_path} ({kind.value}): {e}")
            return SignedUrlResult.failed(kind, str(e))

        return SignedUrlResult(
            success=True,
            url=f"{blob_uri}?{sas_token}",
            blob_uri=blob_uri,
            expires_at=expiry_time,
        )


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

def get_sas_signer() -> BlobSasSigner:
    """Get a BlobSasSigner for the configured storage account."""
    from redirector.config import get_config

    return BlobSasSigner(connection_string=get_config().connection_string)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "BlobSasSigner",
    "SignedUrlResult",
    "classify_storage_error",
    "get_sas_signer",
]
