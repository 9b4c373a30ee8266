"""
Archive fingerprint tool
"""

from .__version__ import (
    __author__,
    __author_email__,
    __copyright__,
    __description__,
    __license__,
    __title__,
    __url__,
    __version__,
)

from .errors import (
    FingerprintError,
    InputNotFound,
    ArchiveReadError,
    DigestUnavailable,
    EncodingParseError,
    SnapshotReadError,
    UnsupportedPathError,
)

from .entry_data import (
    StorageMethod,
    EntryRecord,
    Snapshot,
    DiffState,
    DiffReport,
)

from .content_hashing import (
    ContentHasher,
    DEFAULT_HASH_ALGORITHM,
)

from .archive_scanner import (
    ZipArchiveScanner,
)

from .prefix_codec import (
    shared_prefix_length,
    encode_record,
    encode_records,
    encode_snapshot,
    write_snapshot,
    decode_line,
    decode_lines,
    decode_snapshot,
    read_snapshot,
)

from .snapshot_diff import (
    ArchiveFingerprinter,
    classify_entry_pair,
    compute_snapshot_diff,
)

from .cli_output import (
    ReportPrinter,
)
