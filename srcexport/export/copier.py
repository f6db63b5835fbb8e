#!/usr/bin/env python3
"""File copy primitives of an export run.

VerifiedCopier copies raw bytes and, when hashing is on, compares the
digests of source and destination, retrying on mismatch. The number of
consecutive mismatches is counted across all files of a run: a run whose
copies keep failing is aborted with CopyVerificationError.

Example:
    >>> copier = VerifiedCopier(compute_hash=True, logger=logger)
    >>> copier.copy_binary("/src/app.ico", "/dst/app.ico")
"""

import hashlib
import os
import shutil
import stat
from typing import Callable, Optional

from srcexport.core.constants import Limits
from srcexport.core.encoding import decode_text, encode_text
from srcexport.core.errors import CopyVerificationError
from srcexport.infrastructure.logger import LogCategory, Logger
from srcexport.transforms.replacements import TextRewriter

Hasher = Callable[[str], bytes]

_WRITE_BITS = stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH


def digest_file(
    path: str,
    algorithm: str = Limits.DEFAULT_HASH_ALGORITHM,
    chunk_size: int = Limits.HASH_CHUNK_SIZE,
) -> bytes:
    """Compute the digest of a file.

    Args:
        path: File path
        algorithm: hashlib algorithm name
        chunk_size: Read size

    Returns:
        Digest bytes
    """
    digest = hashlib.new(algorithm)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            digest.update(chunk)
    return digest.digest()


def ensure_parent_directory(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def path_delete(path: str, unprotect: bool) -> None:
    """Delete a file if it exists.

    Args:
        path: File to delete
        unprotect: Clear the read-only state before deleting
    """
    if not os.path.isfile(path) and not os.path.islink(path):
        return

    if unprotect and not os.path.islink(path) and is_read_only(path):
        os.chmod(path, os.stat(path).st_mode | stat.S_IWUSR)

    os.remove(path)


def is_read_only(path: str) -> bool:
    """Check whether a file is write-protected for its owner."""
    return not os.stat(path).st_mode & stat.S_IWUSR


def set_read_only(path: str, read_only: bool) -> None:
    """Force the read-only state of a file.

    Missing files are ignored.
    """
    if not os.path.isfile(path):
        return

    mode = os.stat(path).st_mode
    if read_only:
        os.chmod(path, mode & ~_WRITE_BITS)
    else:
        os.chmod(path, mode | stat.S_IWUSR)


class VerifiedCopier:
    """Byte and text copies with optional digest verification."""

    def __init__(
        self,
        compute_hash: bool,
        logger: Logger,
        hasher: Optional[Hasher] = None,
        max_failures: int = Limits.MAX_CONSECUTIVE_COPY_FAILURES,
    ):
        """Initialize copier.

        Args:
            compute_hash: Verify binary copies by digest
            logger: Event sink of the run
            hasher: Function computing a file digest (MD5 by default)
            max_failures: Consecutive mismatches tolerated before aborting
        """
        self.compute_hash = compute_hash
        self.logger = logger
        self.hasher = hasher or digest_file
        self.max_failures = max_failures
        self.failure_count = 0

    def copy_binary(self, src: str, dst: str) -> None:
        """Copy raw bytes, overwriting dst, and verify the copy.

        Args:
            src: Source file
            dst: Destination file

        Raises:
            CopyVerificationError: If digests keep differing
            OSError: If the file cannot be copied
        """
        while True:
            ensure_parent_directory(dst)
            shutil.copyfile(src, dst)

            if not self.compute_hash:
                return

            if self.hasher(src) == self.hasher(dst):
                self.failure_count = 0
                self.logger.event(LogCategory.VERIFY, dst)
                return

            self.failure_count += 1
            self.logger.event(
                LogCategory.VERIFY, f"Different hash ({self.failure_count})", src=src
            )
            if self.failure_count > self.max_failures:
                raise CopyVerificationError(src, dst, self.failure_count)

    def copy_text(self, src: str, dst: str, rewriter: TextRewriter) -> None:
        """Copy a text file through the rewriter.

        Args:
            src: Source file
            dst: Destination file
            rewriter: Replacements applied to the decoded text
        """
        with open(src, "rb") as f:
            content = f.read()
        self.write_text(content, dst, rewriter)

    def write_text(self, content: bytes, dst: str, rewriter: TextRewriter) -> None:
        """Write file content through the rewriter, keeping its encoding.

        Args:
            content: Raw file content
            dst: Destination file
            rewriter: Replacements applied to the decoded text
        """
        if rewriter:
            text, encoding = decode_text(content)
            content = encode_text(rewriter.apply(text), encoding)

        ensure_parent_directory(dst)
        with open(dst, "wb") as f:
            f.write(content)
