#!/usr/bin/env python3
"""Tests for the verified copy primitives."""

import codecs
import hashlib
import os
import stat

import pytest

from srcexport.core.constants import ErrorCode
from srcexport.core.errors import CopyVerificationError
from srcexport.core.settings import ReplacementItem
from srcexport.export.copier import (
    VerifiedCopier,
    digest_file,
    is_read_only,
    path_delete,
    set_read_only,
)
from srcexport.infrastructure.logger import LogCategory
from srcexport.transforms.replacements import TextRewriter


class FlakyHasher:
    """Reports a mismatch for the first N destination digests."""

    def __init__(self, mismatches: int):
        self.mismatches = mismatches
        self.calls = 0

    def __call__(self, path: str) -> bytes:
        self.calls += 1
        if path.endswith(".dst") and self.mismatches > 0:
            self.mismatches -= 1
            return b"corrupt"
        return digest_file(path)


@pytest.fixture
def source_file(temp_dir):
    path = temp_dir / "a.src"
    path.write_bytes(b"\x00\x01binary\xff")
    return path


class TestDigestFile:
    """Tests for digest_file."""

    def test_md5_by_default(self, temp_dir):
        """Test the default digest is MD5."""
        path = temp_dir / "a.bin"
        path.write_bytes(b"hello")

        assert digest_file(str(path)) == hashlib.md5(b"hello").digest()

    def test_chunked(self, temp_dir):
        """Test chunked reading covers the whole file."""
        path = temp_dir / "a.bin"
        path.write_bytes(b"x" * 1000)

        assert digest_file(str(path), "sha256", chunk_size=7) == hashlib.sha256(b"x" * 1000).digest()


class TestCopyBinary:
    """Tests for VerifiedCopier.copy_binary."""

    def test_copy_without_hash(self, logger, collector, source_file, temp_dir):
        """Test a plain copy reports no verification."""
        copier = VerifiedCopier(False, logger)
        dst = temp_dir / "out" / "a.dst"

        copier.copy_binary(str(source_file), str(dst))

        assert dst.read_bytes() == source_file.read_bytes()
        assert collector.events(LogCategory.VERIFY) == []

    def test_overwrites(self, logger, source_file, temp_dir):
        """Test existing destinations are overwritten."""
        dst = temp_dir / "a.dst"
        dst.write_bytes(b"old content that is longer")

        VerifiedCopier(False, logger).copy_binary(str(source_file), str(dst))

        assert dst.read_bytes() == source_file.read_bytes()

    def test_verified_copy(self, logger, collector, source_file, temp_dir):
        """Test a matching digest reports VERIFY with the destination."""
        copier = VerifiedCopier(True, logger)
        dst = temp_dir / "a.dst"

        copier.copy_binary(str(source_file), str(dst))

        assert collector.values(LogCategory.VERIFY) == [str(dst)]
        assert copier.failure_count == 0

    def test_retries_then_succeeds(self, logger, collector, source_file, temp_dir):
        """Test mismatches are retried and the counter reset on success."""
        copier = VerifiedCopier(True, logger, hasher=FlakyHasher(3))
        dst = temp_dir / "a.dst"

        copier.copy_binary(str(source_file), str(dst))

        assert copier.failure_count == 0
        values = collector.values(LogCategory.VERIFY)
        assert values[:3] == ["Different hash (1)", "Different hash (2)", "Different hash (3)"]
        assert values[3] == str(dst)

    def test_five_mismatches_tolerated(self, logger, source_file, temp_dir):
        """Test five consecutive mismatches still succeed."""
        copier = VerifiedCopier(True, logger, hasher=FlakyHasher(5))

        copier.copy_binary(str(source_file), str(temp_dir / "a.dst"))

        assert copier.failure_count == 0

    def test_sixth_mismatch_fails(self, logger, source_file, temp_dir):
        """Test the run aborts once the counter exceeds five."""
        copier = VerifiedCopier(True, logger, hasher=FlakyHasher(100))

        with pytest.raises(CopyVerificationError) as exc:
            copier.copy_binary(str(source_file), str(temp_dir / "a.dst"))

        assert exc.value.attempts == 6
        assert exc.value.error_code == ErrorCode.VERIFICATION_FAILED
        assert "a.src" in str(exc.value)

    def test_counter_shared_across_files(self, logger, temp_dir):
        """Test consecutive failures accumulate across files until a success."""
        hasher = FlakyHasher(4)
        copier = VerifiedCopier(True, logger, hasher=hasher, max_failures=5)
        first = temp_dir / "first.src"
        first.write_bytes(b"1")

        copier.copy_binary(str(first), str(temp_dir / "first.dst"))
        assert copier.failure_count == 0

        # failures of a file do not survive its successful copy
        hasher.mismatches = 5
        copier.copy_binary(str(first), str(temp_dir / "second.dst"))
        assert copier.failure_count == 0

    def test_counter_not_reset_between_failed_files(self, logger, temp_dir):
        """Test a failing file leaves its count for the next copy."""
        copier = VerifiedCopier(True, logger, hasher=FlakyHasher(100), max_failures=2)
        src = temp_dir / "a.src"
        src.write_bytes(b"1")

        with pytest.raises(CopyVerificationError):
            copier.copy_binary(str(src), str(temp_dir / "a.dst"))

        assert copier.failure_count == 3

    def test_missing_source(self, logger, temp_dir):
        """Test missing sources raise OSError."""
        with pytest.raises(OSError):
            VerifiedCopier(False, logger).copy_binary(str(temp_dir / "missing"), str(temp_dir / "x"))


class TestTextCopy:
    """Tests for copy_text/write_text."""

    def test_rewrites_text(self, logger, temp_dir):
        """Test replacements are applied to the content."""
        src = temp_dir / "a.txt"
        src.write_text("Copyright OldCompany\n", encoding="utf-8")
        dst = temp_dir / "out" / "a.txt"
        rewriter = TextRewriter([ReplacementItem("OldCompany", "NewCompany")])

        VerifiedCopier(False, logger).copy_text(str(src), str(dst), rewriter)

        assert dst.read_text(encoding="utf-8") == "Copyright NewCompany\n"

    def test_keeps_bom(self, logger, temp_dir):
        """Test the byte order mark survives a rewrite."""
        src = temp_dir / "a.cs"
        src.write_bytes(codecs.BOM_UTF8 + b"namespace Old {}")
        dst = temp_dir / "b.cs"

        VerifiedCopier(False, logger).copy_text(
            str(src), str(dst), TextRewriter([ReplacementItem("Old", "New")])
        )

        assert dst.read_bytes() == codecs.BOM_UTF8 + b"namespace New {}"

    def test_empty_rewriter_writes_verbatim(self, logger, temp_dir):
        """Test content is written byte for byte without replacements."""
        dst = temp_dir / "a.txt"
        data = b"line\r\nother\xe9"

        VerifiedCopier(False, logger).write_text(data, str(dst), TextRewriter())

        assert dst.read_bytes() == data


class TestFileHelpers:
    """Tests for path_delete and read-only helpers."""

    def test_delete_missing(self, temp_dir):
        """Test deleting a missing file is a no-op."""
        path_delete(str(temp_dir / "missing"), unprotect=True)

    def test_delete_read_only_unprotected(self, temp_dir):
        """Test read-only files are unprotected before deletion."""
        path = temp_dir / "a.txt"
        path.write_text("x")
        set_read_only(str(path), True)

        path_delete(str(path), unprotect=True)

        assert not path.exists()

    def test_delete_ignores_directories(self, temp_dir):
        """Test directories are never deleted."""
        path_delete(str(temp_dir), unprotect=True)

        assert temp_dir.exists()

    def test_set_read_only(self, temp_dir):
        """Test forcing and clearing the read-only state."""
        path = temp_dir / "a.txt"
        path.write_text("x")

        set_read_only(str(path), True)
        assert is_read_only(str(path))
        assert not os.stat(path).st_mode & stat.S_IWUSR

        set_read_only(str(path), False)
        assert not is_read_only(str(path))

    def test_set_read_only_missing(self, temp_dir):
        """Test missing files are ignored."""
        set_read_only(str(temp_dir / "missing"), True)
