"""
Line-based text encoding of snapshots.

Every record is written as one line ``[N:]suffix:method:hash:metadata``. ``N`` is the number of
leading characters the path shares with the path on the previous line and is omitted if it is 0,
``suffix`` is the remainder of the path. The records must be sorted by path for the shared prefixes
to be meaningful, e.g.::

    META-INF/:S::
    9:MANIFEST.MF:D:7f83b165...:
    a.txt:S:2cf24dba...:feca0000
"""

from __future__ import annotations

import logging
import pathlib as pl
from typing import IO, Iterable, Iterator, Optional, Tuple, Union

from archive_fingerprint.entry_data import EntryRecord, Snapshot, StorageMethod
from archive_fingerprint.errors import EncodingParseError, InputNotFound, SnapshotReadError, \
    UnsupportedPathError

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = ':'
# Optional prefix length, suffix, method, hash and metadata.
MAX_FIELDS = 5
# Characters that would be read back as field or line separators.
RESERVED_PATH_CHARACTERS = (FIELD_SEPARATOR, '\n', '\r')


def shared_prefix_length(first: str, second: str) -> int:
    """
    :return: Number of leading characters both strings have in common.
    """
    max_len = min(len(first), len(second))
    for i in range(max_len):
        if first[i] != second[i]:
            return i
    return max_len


def encode_record(prev_path: str, record: EntryRecord) -> str:
    """
    Encodes a single record relative to the path of the previously encoded record.

    :param prev_path: Path of the previous record, empty for the first record.
    :param record: Record to encode.
    :raises UnsupportedPathError: If the path contains a field or line separator.
    :return: Encoded line without line terminator.
    """
    for character in RESERVED_PATH_CHARACTERS:
        if character in record.path:
            raise UnsupportedPathError(
                f'Path {record.path!r} contains the reserved character {character!r}')

    prefix_len = shared_prefix_length(prev_path, record.path)
    fields = [record.path[prefix_len:], record.method.symbol, record.content_hash, record.metadata]
    if prefix_len > 0:
        fields.insert(0, str(prefix_len))
    return FIELD_SEPARATOR.join(fields)


def encode_records(records: Iterable[EntryRecord]) -> Iterator[str]:
    """
    Encodes the records in the given order.

    :param records: Records sorted by path.
    :return: Encoded lines without line terminators.
    """
    prev_path = ''
    for record in records:
        yield encode_record(prev_path, record)
        prev_path = record.path


def encode_snapshot(snapshot: Union[Snapshot, Iterable[EntryRecord]]) -> str:
    """
    :param snapshot: Snapshot or path-sorted records to encode.
    :return: Full text encoding, each line terminated by a newline.
    """
    records = snapshot.records() if isinstance(snapshot, Snapshot) else snapshot
    return ''.join(line + '\n' for line in encode_records(records))


def write_snapshot(snapshot: Union[Snapshot, Iterable[EntryRecord]], output: IO[str]) -> None:
    """
    Encodes all records before writing, so nothing is written if a record cannot be encoded.
    """
    output.write(encode_snapshot(snapshot))


def decode_line(prev_path: str, line: str, line_number: int = 1,
                source: Optional[str] = None) -> EntryRecord:
    """
    Decodes a single non-blank line.

    :param prev_path: Path of the previously decoded record, empty for the first record.
    :param line: Line without line terminator.
    :param line_number: Line number used in error messages.
    :param source: File name used in error messages.
    :raises EncodingParseError: If the line is malformed.
    :return: Decoded record.
    """
    fields = line.split(FIELD_SEPARATOR, MAX_FIELDS - 1)

    if len(fields) == MAX_FIELDS:
        prefix_field = fields.pop(0)
        if not (prefix_field.isascii() and prefix_field.isdigit()):
            raise EncodingParseError(
                f'Invalid shared prefix length {prefix_field!r}', line_number, source)
        prefix_len = int(prefix_field)
    elif len(fields) == MAX_FIELDS - 1:
        prefix_len = 0
    else:
        raise EncodingParseError(
            f'Expected {MAX_FIELDS - 1} or {MAX_FIELDS} fields, found {len(fields)}',
            line_number, source)

    if prefix_len > len(prev_path):
        raise EncodingParseError(
            f'Shared prefix length {prefix_len} exceeds the previous path {prev_path!r}',
            line_number, source)

    suffix, method_symbol, content_hash, metadata = fields
    try:
        method = StorageMethod(method_symbol)
    except ValueError as error:
        raise EncodingParseError(
            f'Unknown storage method {method_symbol!r}', line_number, source) from error

    return EntryRecord(prev_path[:prefix_len] + suffix, method, content_hash, metadata)


def _iter_records(lines: Iterable[str], source: Optional[str]) -> Iterator[Tuple[int, EntryRecord]]:
    prev_path = ''
    for line_number, line in enumerate(lines, start=1):
        line = line.rstrip('\r\n')
        if not line.strip():
            continue
        record = decode_line(prev_path, line, line_number, source)
        prev_path = record.path
        yield line_number, record


def decode_lines(lines: Iterable[str], source: Optional[str] = None) -> Snapshot:
    """
    Decodes an encoded snapshot. Blank lines are skipped.

    :param lines: Encoded lines, with or without line terminators.
    :param source: File name used in error messages.
    :raises EncodingParseError: If any of the lines is malformed.
    :return: Decoded snapshot.
    """
    snapshot = Snapshot()
    for line_number, record in _iter_records(lines, source):
        logger.debug('Decoded line %d: %s', line_number, record.path)
        snapshot.put(record)
    return snapshot


def decode_snapshot(text: str) -> Snapshot:
    return decode_lines(text.splitlines())


def _decode_utf8(reader: IO[bytes], source: str) -> Iterator[str]:
    for line_number, raw_line in enumerate(reader, start=1):
        try:
            yield raw_line.decode('utf8')
        except UnicodeDecodeError as error:
            raise EncodingParseError(f'Invalid UTF-8: {error.reason}', line_number, source) \
                from error


def read_snapshot(path: Union[str, pl.Path]) -> Snapshot:
    """
    Reads an encoded snapshot from a UTF-8 text file.

    :param path: Path to the encoded snapshot.
    :raises InputNotFound: If the file does not exist.
    :raises SnapshotReadError: If the file cannot be read.
    :raises EncodingParseError: If the file contains a malformed line or invalid UTF-8.
    :return: Decoded snapshot.
    """
    path = pl.Path(path)
    if not path.is_file():
        raise InputNotFound(str(path))

    try:
        with open(path, 'rb') as reader:
            snapshot = decode_lines(_decode_utf8(reader, str(path)), source=str(path))
    except OSError as error:
        raise SnapshotReadError(f'Failed to read {path}: {error}') from error
    logger.debug('Read %d entries from %s', len(snapshot), path)
    return snapshot
