"""
Errors raised while scanning archives and reading or writing encoded snapshots.
"""

from __future__ import annotations

from typing import Optional


class FingerprintError(Exception):
    """
    Base class of all errors raised by archive-fingerprint. Each of them aborts the whole operation.
    """


class InputNotFound(FingerprintError, FileNotFoundError):
    """
    Error raised if an input archive or encoded snapshot does not exist.
    """

    def __init__(self, filename):
        super().__init__(f'File not found: {filename}')
        self.filename = filename


class ArchiveReadError(FingerprintError):
    """
    Error raised if the archive cannot be opened or one of its members cannot be read.
    """


class DigestUnavailable(FingerprintError):
    """
    Error raised if the requested content hash algorithm cannot be used.
    """


class EncodingParseError(FingerprintError, ValueError):
    """
    Error raised if a line of an encoded snapshot is malformed.
    """

    def __init__(self, message: str, line_number: int, source: Optional[str] = None):
        """
        :param message: Description of the problem.
        :param line_number: 1-based number of the offending line.
        :param source: Name of the file the line was read from, if any.
        """
        location = f'{source}:{line_number}' if source is not None else f'line {line_number}'
        super().__init__(f'{location}: {message}')
        self.line_number = line_number
        self.source = source


class SnapshotReadError(FingerprintError):
    """
    Error raised if an encoded snapshot exists but cannot be read.
    """


class UnsupportedPathError(FingerprintError, ValueError):
    """
    Error raised if a member path contains a character the line encoding cannot represent.
    """
