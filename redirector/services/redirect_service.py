# ============================================================================
# REDIRECT SERVICE
# ============================================================================
# EPOCH: 1 - BLOB REDIRECT
# STATUS: Redirector - Path to signed URL redirect
# PURPOSE: Turn a logical file path into a 308 redirect to a signed blob URL
# CREATED: 19 OCT 2026
# ============================================================================
"""
Redirect Service

Request handling for the OrchestraWebApp endpoint, kept apart from the
blueprint so it can be called directly with a plain func.HttpRequest.

Flow:
    path (query ?path= or body) -> split on last '/'
        -> BlobSasSigner.get_blob_sas_url -> 308 Location: <uri>?<sas>

Status codes:
    308  signed URL issued
    400  no path, or path not of the form <container>/<file>
    404  storage account/resource not found
    500  storage configuration or unexpected failure
    502  storage rejected the credential
    503  storage unreachable
"""

from typing import Dict, Optional

import azure.functions as func

from core.contracts import InvalidPathError, StorageErrorKind, split_path
from core.logging import get_logger, log_context
from infrastructure.storage import BlobSasSigner, get_sas_signer
from redirector.config import RedirectorConfig, get_config
from redirector.models.responses import ErrorResponse, json_response

logger = get_logger(__name__)

PATH_PARAM = "path"
MISSING_PATH_MESSAGE = "Please pass a path on the query string or in the request body"

ERROR_STATUS_CODES: Dict[StorageErrorKind, int] = {
    StorageErrorKind.AUTHENTICATION: 502,
    StorageErrorKind.NOT_FOUND: 404,
    StorageErrorKind.NETWORK: 503,
    StorageErrorKind.CONFIGURATION: 500,
    StorageErrorKind.UNKNOWN: 500,
}

ERROR_MESSAGES: Dict[StorageErrorKind, str] = {
    StorageErrorKind.AUTHENTICATION: "Storage authentication failed",
    StorageErrorKind.NOT_FOUND: "Storage resource not found",
    StorageErrorKind.NETWORK: "Storage service unavailable",
    StorageErrorKind.CONFIGURATION: "Storage is not configured correctly",
    StorageErrorKind.UNKNOWN: "Failed to sign blob URL",
}


def extract_path(req: func.HttpRequest) -> Optional[str]:
    """Read the path from the query string, falling back to the body."""
    path = req.params.get(PATH_PARAM)
    if path and path.strip():
        return path

    body = req.get_body()
    if body:
        text = body.decode("utf-8", errors="replace")
        if text.strip():
            return text

    return None


def _text_response(message: str, status_code: int) -> func.HttpResponse:
    return func.HttpResponse(message, status_code=status_code, mimetype="text/plain")


def _error_response(kind: StorageErrorKind) -> func.HttpResponse:
    """JSON error for a storage failure. Backend detail stays in the log."""
    return json_response(
        ErrorResponse(error=ERROR_MESSAGES[kind], code=f"STORAGE_{kind.value.upper()}"),
        status_code=ERROR_STATUS_CODES[kind],
    )


def handle_redirect(
    req: func.HttpRequest,
    signer: Optional[BlobSasSigner] = None,
    config: Optional[RedirectorConfig] = None,
    invocation_id: Optional[str] = None,
) -> func.HttpResponse:
    """
    Redirect to a signed URL for the blob named by the request path.

    Args:
        req: Incoming GET request
        signer: SAS signer (defaults to one built from configuration)
        config: Configuration (defaults to the process singleton)
        invocation_id: Functions invocation id, for log context

    Returns:
        308 redirect, or an error response (see module docstring)
    """
    config = config or get_config()

    with log_context(invocation_id=invocation_id, function_name="OrchestraWebApp"):
        logger.info("OrchestraWebApp triggered.")

        path = extract_path(req)
        if path is None:
            logger.info("No path was passed on the query string or in the request body")
            return _text_response(MISSING_PATH_MESSAGE, 400)

        with log_context(path=path.strip()):
            try:
                blob_path = split_path(path)
            except InvalidPathError as e:
                logger.info(f"Rejected path: {e}")
                return _text_response(str(e), 400)

            signer = signer or get_sas_signer()
            result = signer.get_blob_sas_url(
                container=blob_path.container_name,
                blob_path=blob_path.blob_name,
                timeout_seconds=config.token_timeout_seconds,
            )

            if not result.success:
                logger.error(
                    f"Signing failed for {blob_path} "
                    f"({result.error_kind.value}): {result.error_message}"
                )
                return _error_response(result.error_kind)

            logger.info(
                f"finalURL: {result.blob_uri}?<sas redacted>",
                extra={"expires_at": result.expires_at},
            )
            return func.HttpResponse(
                status_code=308,
                headers={"Location": result.url},
            )


__all__ = [
    "ERROR_STATUS_CODES",
    "MISSING_PATH_MESSAGE",
    "extract_path",
    "handle_redirect",
]
