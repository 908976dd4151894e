# ============================================================================
# REQUEST PATH CONTRACT TESTS
# ============================================================================
# EPOCH: 1 - BLOB REDIRECT
# STATUS: Tests - Path splitting
# PURPOSE: Verify split_path and BlobPath container/blob derivation
# CREATED: 19 OCT 2026
# ============================================================================
"""
Request Path Contract Tests

Pure unit tests for core.contracts: no storage, no HTTP.

Run with:
    pytest tests/test_contracts.py -v
"""

import pytest
from pydantic import ValidationError

from core.contracts import BlobPath, InvalidPathError, split_path


# ============================================================================
# SPLIT ON LAST SEPARATOR
# ============================================================================

class TestSplitPath:
    """Tests for split_path()."""

    def test_nested_path_splits_on_last_separator(self):
        result = split_path("orchestra-poc/reports/2023/file.pdf")

        assert result.filepath == "orchestra-poc/reports/2023"
        assert result.filename == "file.pdf"

    def test_container_and_file_only(self):
        result = split_path("orchestra-poc/file.pdf")

        assert result.filepath == "orchestra-poc"
        assert result.filename == "file.pdf"

    def test_whitespace_trimmed_around_both_parts(self):
        result = split_path("  orchestra-poc/reports /  file.pdf \n")

        assert result.filepath == "orchestra-poc/reports"
        assert result.filename == "file.pdf"

    @pytest.mark.parametrize("path", [
        "orchestra-poc/reports/2023/file.pdf",
        "c/f",
        "container/with spaces/in name.txt",
    ])
    def test_rejoin_reconstructs_trimmed_path(self, path):
        result = split_path(path)

        assert f"{result.filepath}/{result.filename}" == path.strip()
        assert str(result) == path.strip()

    def test_no_separator_rejected(self):
        with pytest.raises(InvalidPathError, match="no '/' separator"):
            split_path("file.pdf")

    def test_leading_separator_rejected(self):
        with pytest.raises(InvalidPathError, match="no container"):
            split_path("/file.pdf")

    def test_blank_container_rejected(self):
        with pytest.raises(InvalidPathError, match="no container"):
            split_path("   /file.pdf")

    @pytest.mark.parametrize("path", ["/orchestra-poc/file.pdf", " /reports/file.pdf"])
    def test_blank_first_segment_rejected(self, path):
        with pytest.raises(InvalidPathError, match="no container"):
            split_path(path)

    def test_trailing_separator_rejected(self):
        with pytest.raises(InvalidPathError, match="no file name"):
            split_path("orchestra-poc/reports/")

    def test_invalid_path_error_is_value_error(self):
        with pytest.raises(ValueError):
            split_path("no-separator")


# ============================================================================
# BLOB PATH
# ============================================================================

class TestBlobPath:
    """Tests for BlobPath container/blob derivation."""

    def test_container_name_is_first_segment(self):
        blob_path = split_path("orchestra-poc/reports/2023/file.pdf")

        assert blob_path.container_name == "orchestra-poc"
        assert blob_path.blob_name == "reports/2023/file.pdf"

    def test_blob_name_without_prefix(self):
        blob_path = split_path("orchestra-poc/file.pdf")

        assert blob_path.container_name == "orchestra-poc"
        assert blob_path.blob_name == "file.pdf"

    def test_frozen(self):
        blob_path = BlobPath(filepath="c", filename="f")

        with pytest.raises(ValidationError):
            blob_path.filename = "other"

    def test_empty_parts_rejected_by_model(self):
        with pytest.raises(ValidationError):
            BlobPath(filepath="", filename="f")
