"""
Diffing implementation.
"""

from __future__ import annotations

import logging
import pathlib as pl
from typing import IO, List, Union

from archive_fingerprint.archive_scanner import ZipArchiveScanner
from archive_fingerprint.content_hashing import DEFAULT_HASH_ALGORITHM, ContentHasher
from archive_fingerprint.entry_data import DiffReport, DiffState, EntryRecord, Snapshot
from archive_fingerprint.prefix_codec import read_snapshot, write_snapshot

logger = logging.getLogger(__name__)


def classify_entry_pair(first: EntryRecord, second: EntryRecord) -> DiffState:
    """
    Classifies two records stored under the same path.

    A changed storage method with an unchanged content hash is a content difference, the member was
    repacked. Otherwise differing metadata is a metadata difference. A changed content hash with an
    unchanged storage method is NOT reported, the hashes are only compared in combination with the
    method.

    :param first: Record from the first snapshot.
    :param second: Record from the second snapshot.
    :return: `CONTENT`, `METADATA` or `EQUAL`.
    """
    if first.method != second.method and first.content_hash == second.content_hash:
        return DiffState.CONTENT
    if first.metadata != second.metadata:
        return DiffState.METADATA
    return DiffState.EQUAL


def compute_snapshot_diff(first: Snapshot, second: Snapshot) -> DiffReport:
    """
    Computes the diff between two snapshots. Records are matched by path only.

    :param first: First snapshot.
    :param second: Second snapshot.
    :return: Report listing every differing path in sorted order.
    """
    paths1 = first.paths()
    paths2 = second.paths()

    # Both path lists are sorted, so we can traverse them in parallel, always proceeding with the
    # list where the next path is the lexicographically smaller one.
    report = DiffReport()
    i, j = 0, 0
    while i < len(paths1) and j < len(paths2):
        left = paths1[i]
        right = paths2[j]
        if left == right:
            report.add(left, classify_entry_pair(first.get(left), second.get(right)))
            i += 1
            j += 1
        elif left < right:
            report.add(left, DiffState.ONLY_FIRST)
            i += 1
        else:
            report.add(right, DiffState.ONLY_SECOND)
            j += 1
    # One of the lists might not have been traversed fully.
    for path in paths1[i:]:
        report.add(path, DiffState.ONLY_FIRST)
    for path in paths2[j:]:
        report.add(path, DiffState.ONLY_SECOND)

    logger.debug('Diff stats: %s', {state.name: count for state, count in report.stats().items()})
    return report


class ArchiveFingerprinter:
    """
    Entry point combining scanning, encoding and comparison of archives.
    """

    def __init__(self, hash_algorithm: str = DEFAULT_HASH_ALGORITHM, workers: int = 1,
                 hash_buffer_size=128 * 1024):
        """
        :param hash_algorithm: String describing a hash algorithm supported by `hashlib`
        :param workers: Number of threads used to hash archive members.
        :param hash_buffer_size: Size of the read buffer used by stream hashing implementation
        :raises DigestUnavailable: If the hash algorithm cannot be used.
        """
        self._hasher = ContentHasher(hash_algorithm, hash_buffer_size)
        self._scanner = ZipArchiveScanner(self._hasher, workers=workers)

    def scan(self, archive: Union[str, pl.Path]) -> List[EntryRecord]:
        """
        :param archive: Path to the archive.
        :return: Records of all archive members sorted by path.
        """
        return self._scanner.scan(archive)

    def analyze(self, archive: Union[str, pl.Path], output: IO[str]) -> int:
        """
        Scans the archive and writes its encoding to the output stream. Nothing is written if the
        scan fails.

        :param archive: Path to the archive.
        :param output: Text stream receiving the encoded lines.
        :return: Number of written records.
        """
        records = self.scan(archive)
        write_snapshot(records, output)
        return len(records)

    @staticmethod
    def compare(first_encoding: Union[str, pl.Path],
                second_encoding: Union[str, pl.Path]) -> DiffReport:
        """
        Compares two encoded snapshots. Both files are decoded before the comparison starts.

        :param first_encoding: Path to the first encoded snapshot.
        :param second_encoding: Path to the second encoded snapshot.
        :return: Diff between the snapshots.
        """
        first = read_snapshot(first_encoding)
        second = read_snapshot(second_encoding)
        return compute_snapshot_diff(first, second)
