# ============================================================================
# SAS SIGNER TESTS
# ============================================================================
# EPOCH: 1 - BLOB REDIRECT
# STATUS: Tests - Account SAS generation
# PURPOSE: Verify BlobSasSigner scope, expiry, URL shape and error mapping
# CREATED: 19 OCT 2026
# ============================================================================
"""
SAS Signer Tests

Uses a syntactically valid fake connection string. The SDK signs account
SAS tokens locally with the shared key, so no storage account or network
is needed.

Run with:
    pytest tests/test_storage.py -v
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch
from urllib.parse import parse_qs, urlsplit

import pytest
from azure.core.exceptions import (
    ClientAuthenticationError,
    ResourceNotFoundError,
    ServiceRequestError,
)

from core.contracts import StorageErrorKind
from infrastructure.storage import BlobSasSigner, SignedUrlResult, classify_storage_error


ACCOUNT_NAME = "orchestrasa"
CONNECTION_STRING = (
    "DefaultEndpointsProtocol=https;"
    f"AccountName={ACCOUNT_NAME};"
    "AccountKey=dGVzdGtleXRlc3RrZXl0ZXN0a2V5dGVzdGtleQ==;"
    "EndpointSuffix=core.windows.net"
)
BLOB_URI = f"https://{ACCOUNT_NAME}.blob.core.windows.net/orchestra-poc/reports/2023/file.pdf"


# ============================================================================
# HELPERS
# ============================================================================

def _sas_params(token: str) -> dict:
    """Parse a SAS query string into {name: value}."""
    return {k: v[0] for k, v in parse_qs(token).items()}


def _sas_expiry(token: str) -> datetime:
    return datetime.strptime(_sas_params(token)["se"], "%Y-%m-%dT%H:%M:%SZ").replace(
        tzinfo=timezone.utc
    )


# ============================================================================
# TOKEN GENERATION
# ============================================================================

class TestGenerateSasToken:
    """Tests for BlobSasSigner.generate_sas_token()."""

    def test_scope_is_read_blob_object_container(self):
        token = BlobSasSigner(CONNECTION_STRING).generate_sas_token(300)
        params = _sas_params(token)

        assert params["sp"] == "r"
        assert params["ss"] == "b"
        assert set(params["srt"]) == {"o", "c"}
        assert params["sig"]

    @pytest.mark.parametrize("timeout", [300, 600])
    def test_expiry_is_now_plus_timeout(self, timeout):
        before = datetime.now(timezone.utc)
        token = BlobSasSigner(CONNECTION_STRING).generate_sas_token(timeout)
        after = datetime.now(timezone.utc)

        expiry = _sas_expiry(token)

        # se is truncated to whole seconds
        assert before + timedelta(seconds=timeout - 1) <= expiry
        assert expiry <= after + timedelta(seconds=timeout)

    def test_missing_account_key_raises(self):
        signer = BlobSasSigner(
            f"DefaultEndpointsProtocol=https;AccountName={ACCOUNT_NAME};"
            "SharedAccessSignature=sv=2021-08-06&sig=abc;EndpointSuffix=core.windows.net"
        )

        with pytest.raises(ValueError, match="AccountKey"):
            signer.generate_sas_token(300)

    def test_no_connection_string_raises(self):
        with pytest.raises(ValueError, match="No storage connection string"):
            BlobSasSigner(None).generate_sas_token(300)


# ============================================================================
# SIGNED URL
# ============================================================================

class TestGetBlobSasUrl:
    """Tests for BlobSasSigner.get_blob_sas_url()."""

    def test_url_is_canonical_uri_plus_token(self):
        result = BlobSasSigner(CONNECTION_STRING).get_blob_sas_url(
            container="orchestra-poc",
            blob_path="reports/2023/file.pdf",
            timeout_seconds=300,
        )

        assert result.success
        assert result.blob_uri == BLOB_URI
        prefix, _, token = result.url.partition("?")
        assert prefix == BLOB_URI
        assert token
        assert _sas_params(token)["sp"] == "r"

    def test_url_is_well_formed(self):
        result = BlobSasSigner(CONNECTION_STRING).get_blob_sas_url("orchestra-poc", "file.pdf")

        parts = urlsplit(result.url)
        assert parts.scheme == "https"
        assert parts.netloc == f"{ACCOUNT_NAME}.blob.core.windows.net"
        assert parts.path == "/orchestra-poc/file.pdf"
        assert "sig" in parse_qs(parts.query)

    def test_expires_at_reported(self):
        before = datetime.now(timezone.utc)
        result = BlobSasSigner(CONNECTION_STRING).get_blob_sas_url(
            "orchestra-poc", "file.pdf", timeout_seconds=600
        )

        assert before + timedelta(seconds=600) <= result.expires_at
        assert result.expires_at <= datetime.now(timezone.utc) + timedelta(seconds=600)

    def test_blob_need_not_exist(self):
        # Pure signing: no blob lookup is made
        result = BlobSasSigner(CONNECTION_STRING).get_blob_sas_url(
            "orchestra-poc", "does/not/exist.bin"
        )

        assert result.success

    def test_each_call_signs_independently(self):
        signer = BlobSasSigner(CONNECTION_STRING)

        first = signer.get_blob_sas_url("orchestra-poc", "file.pdf", timeout_seconds=300)
        second = signer.get_blob_sas_url("orchestra-poc", "file.pdf", timeout_seconds=301)

        assert first.blob_uri == second.blob_uri
        assert first.url.split("?")[0] == second.url.split("?")[0]
        assert first.url != second.url

    def test_missing_connection_string_is_configuration_error(self):
        result = BlobSasSigner(None).get_blob_sas_url("orchestra-poc", "file.pdf")

        assert not result.success
        assert result.error_kind == StorageErrorKind.CONFIGURATION
        assert result.url is None

    def test_malformed_connection_string_is_configuration_error(self):
        result = BlobSasSigner("not a connection string").get_blob_sas_url("c", "f")

        assert not result.success
        assert result.error_kind == StorageErrorKind.CONFIGURATION

    @pytest.mark.parametrize("error, kind", [
        (ClientAuthenticationError("bad key"), StorageErrorKind.AUTHENTICATION),
        (ResourceNotFoundError("no account"), StorageErrorKind.NOT_FOUND),
        (ServiceRequestError("dns failure"), StorageErrorKind.NETWORK),
        (RuntimeError("boom"), StorageErrorKind.UNKNOWN),
    ])
    def test_sdk_errors_are_categorized(self, error, kind):
        signer = BlobSasSigner(CONNECTION_STRING)

        with patch.object(signer, "_get_blob_service", side_effect=error):
            result = signer.get_blob_sas_url("orchestra-poc", "file.pdf")

        assert not result.success
        assert result.error_kind == kind
        assert result.error_message

    def test_signing_error_after_uri_resolution_is_categorized(self):
        signer = BlobSasSigner(CONNECTION_STRING)

        with patch(
            "infrastructure.storage.generate_account_sas",
            side_effect=ClientAuthenticationError("rejected"),
        ):
            result = signer.get_blob_sas_url("orchestra-poc", "file.pdf")

        assert result.error_kind == StorageErrorKind.AUTHENTICATION


# ============================================================================
# ERROR CLASSIFICATION / CREDENTIAL VALIDATION
# ============================================================================

class TestClassifyStorageError:
    """Tests for classify_storage_error()."""

    def test_value_error_is_configuration(self):
        assert classify_storage_error(ValueError("x")) == StorageErrorKind.CONFIGURATION

    def test_failed_result_factory(self):
        result = SignedUrlResult.failed(StorageErrorKind.NETWORK, "timeout")

        assert result.success is False
        assert result.error_kind == StorageErrorKind.NETWORK
        assert result.error_message == "timeout"


class TestValidateCredential:
    """Tests for BlobSasSigner.validate_credential()."""

    def test_valid_connection_string(self):
        BlobSasSigner(CONNECTION_STRING).validate_credential()

    def test_client_built_once(self):
        signer = BlobSasSigner(CONNECTION_STRING)
        service = MagicMock()
        service.credential.account_key = "a2V5"

        with patch(
            "infrastructure.storage.BlobServiceClient.from_connection_string",
            return_value=service,
        ) as factory:
            signer.validate_credential()
            signer.validate_credential()

        factory.assert_called_once_with(CONNECTION_STRING)
