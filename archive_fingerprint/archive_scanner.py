"""
Scanner that lists the members of zip-based archives (zip, jar, ...) and fingerprints each of them.
"""
from __future__ import annotations

import logging
import pathlib as pl
import zipfile
import zlib
from concurrent.futures import ThreadPoolExecutor
from typing import List, Union

from archive_fingerprint.content_hashing import ContentHasher
from archive_fingerprint.entry_data import EntryRecord, StorageMethod
from archive_fingerprint.errors import ArchiveReadError, InputNotFound

logger = logging.getLogger(__name__)

# Raised by zipfile while opening the archive.
_ARCHIVE_OPEN_ERRORS = (OSError, EOFError, zipfile.BadZipFile)
# Raised by zipfile while streaming a member: bad CRC, truncated data, encrypted members (Runtime),
# unsupported compression (NotImplemented), corrupt deflate streams (zlib).
_MEMBER_READ_ERRORS = (OSError, EOFError, RuntimeError, zipfile.BadZipFile, zlib.error)


def storage_method(info: zipfile.ZipInfo) -> StorageMethod:
    """
    :param info: Archive member.
    :return: `STORED` for uncompressed members, `DEFLATED` for every compression method.
    """
    return StorageMethod.STORED if info.compress_type == zipfile.ZIP_STORED \
        else StorageMethod.DEFLATED


class ZipArchiveScanner:
    """
    Scanner for zip-based archives.
    """

    def __init__(self, hasher: ContentHasher, workers: int = 1):
        """
        :param hasher: Hasher used to fingerprint the uncompressed member contents.
        :param workers: Number of threads hashing members concurrently. 1 hashes sequentially.
        """
        if workers < 1:
            raise ValueError(f'workers must be at least 1, got {workers}')
        self._hasher = hasher
        self.workers = workers

    def check_file(self, path: pl.Path) -> bool:
        """
        Checks if the given path can be processed by this scanner.

        :param path: Input path
        :return: True, if the path is a zip archive.
        """
        return path.is_file() and zipfile.is_zipfile(path)

    def scan(self, path: Union[str, pl.Path]) -> List[EntryRecord]:
        """
        Lists the files and folders in the given archive and fingerprints each of them.

        :param path: Input archive path.
        :raises InputNotFound: If the archive does not exist.
        :raises ArchiveReadError: If the archive or one of its members cannot be read.
        :return: Records of all members, sorted by path.
        """
        path = pl.Path(path)
        if not path.exists():
            raise InputNotFound(str(path))
        if not self.check_file(path):
            raise ArchiveReadError(f'Not a zip file: {path}')

        try:
            archive = zipfile.ZipFile(path, 'r')
        except _ARCHIVE_OPEN_ERRORS as error:
            raise ArchiveReadError(f'Failed to open zip file {path}: {error}') from error

        with archive:
            members = archive.infolist()
            logger.debug('Scanning %d members of %s with %d worker(s)',
                          len(members), path, self.workers)

            if self.workers > 1:
                # Leaving the executor waits for all pending members, so the archive stays open
                # until every worker has released its member stream.
                with ThreadPoolExecutor(max_workers=self.workers) as executor:
                    records = list(executor.map(
                        lambda info: self._fingerprint_member(archive, info), members))
            else:
                records = [self._fingerprint_member(archive, info) for info in members]

        # The encoding relies on this order, independent of the order the members were hashed in.
        records.sort(key=lambda record: record.path)
        return records

    def _fingerprint_member(self, archive: zipfile.ZipFile, info: zipfile.ZipInfo) -> EntryRecord:
        """
        Creates the record of a single member. Directories are not read.

        :param archive: Open archive containing the member.
        :param info: Member to fingerprint.
        :raises ArchiveReadError: If the member content cannot be streamed.
        :return: Record of the member.
        """
        method = storage_method(info)
        metadata = info.extra.hex() if info.extra else ''

        if info.is_dir():
            return EntryRecord(info.filename, method, '', metadata)

        try:
            with archive.open(info, 'r') as stream:
                content_hash = self._hasher.compute_hash(stream)
        except _MEMBER_READ_ERRORS as error:
            raise ArchiveReadError(
                f'Failed to read zip entry {info.filename}: {error}') from error

        logger.debug('Hashed %s (%s)', info.filename, method.name)
        return EntryRecord(info.filename, method, content_hash, metadata)
