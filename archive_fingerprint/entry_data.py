"""
Data classes representing archive entries, snapshots of an archive and the diff between two
snapshots.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Iterable, Iterator, List, Optional


class StorageMethod(Enum):
    """
    Storage method of an archive member. Every compression scheme is collapsed into `DEFLATED`.
    """

    STORED = 'S'
    DEFLATED = 'D'

    @property
    def symbol(self) -> str:
        """
        :return: Single character used for this method in the encoded snapshot.
        """
        return self.value


@dataclass(frozen=True)
class EntryRecord:
    """
    Fingerprint of a single archive member. Directories have an empty content hash.
    """
    path: str
    method: StorageMethod
    content_hash: str = ''
    metadata: str = ''


class Snapshot:
    """
    Mapping from member path to `EntryRecord`. The paths are additionally kept in a sorted list, so
    iteration is always in path order regardless of insertion order.
    """

    def __init__(self, records: Optional[Iterable[EntryRecord]] = None):
        """
        :param records: Initial records. Later records overwrite earlier ones with the same path.
        """
        self._records: Dict[str, EntryRecord] = {}
        self._sorted_paths: List[str] = []
        if records is not None:
            for record in records:
                self.put(record)

    def put(self, record: EntryRecord) -> None:
        """
        Inserts the record or replaces the record previously stored under the same path.
        :param record: Record to store.
        """
        if record.path not in self._records:
            bisect.insort(self._sorted_paths, record.path)
        self._records[record.path] = record

    def get(self, path: str) -> Optional[EntryRecord]:
        return self._records.get(path)

    def paths(self) -> List[str]:
        """
        :return: All paths of the snapshot in sorted order.
        """
        return list(self._sorted_paths)

    def records(self) -> List[EntryRecord]:
        """
        :return: All records of the snapshot sorted by path.
        """
        return [self._records[path] for path in self._sorted_paths]

    def __contains__(self, path) -> bool:
        return path in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(self._sorted_paths)

    def __len__(self) -> int:
        return len(self._records)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Snapshot):
            return NotImplemented
        return self._records == other._records

    def __repr__(self):
        return f'Snapshot({len(self)} entries)'


class DiffState(Enum):
    """
    Enumeration that describes how a single path is classified when comparing two snapshots.
    """

    EQUAL = auto()
    CONTENT = auto()
    METADATA = auto()
    ONLY_FIRST = auto()
    ONLY_SECOND = auto()


@dataclass
class DiffReport:
    """
    This class contains the full result of a snapshot comparison. Each path is contained in at
    most one of the lists, paths without a reported difference are not contained at all.
    """
    only_in_first: List[str] = field(default_factory=list)
    only_in_second: List[str] = field(default_factory=list)
    content_differing: List[str] = field(default_factory=list)
    metadata_differing: List[str] = field(default_factory=list)

    def add(self, path: str, state: DiffState) -> None:
        """
        Files the path under the list matching the state. `DiffState.EQUAL` is ignored.
        """
        if state == DiffState.ONLY_FIRST:
            self.only_in_first.append(path)
        elif state == DiffState.ONLY_SECOND:
            self.only_in_second.append(path)
        elif state == DiffState.CONTENT:
            self.content_differing.append(path)
        elif state == DiffState.METADATA:
            self.metadata_differing.append(path)

    def is_empty(self) -> bool:
        return not (self.only_in_first or self.only_in_second or self.content_differing
                    or self.metadata_differing)

    def stats(self) -> Dict[DiffState, int]:
        """
        Computes the number of reported paths per `DiffState`.
        :return: Dict mapping each differing `DiffState` to the corresponding path count.
        """
        return {
            DiffState.ONLY_FIRST: len(self.only_in_first),
            DiffState.ONLY_SECOND: len(self.only_in_second),
            DiffState.CONTENT: len(self.content_differing),
            DiffState.METADATA: len(self.metadata_differing),
        }
