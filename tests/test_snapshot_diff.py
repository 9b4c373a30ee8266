"""
Test cases for the snapshot comparison.
"""
import pathlib as pl
import tempfile
import unittest
from unittest import TestCase

from archive_fingerprint.entry_data import DiffReport, DiffState, EntryRecord, Snapshot, \
    StorageMethod
from archive_fingerprint.errors import InputNotFound
from archive_fingerprint.snapshot_diff import ArchiveFingerprinter, classify_entry_pair, \
    compute_snapshot_diff

S = StorageMethod.STORED
D = StorageMethod.DEFLATED


class TestClassification(TestCase):
    """
    Tests the classification of records present in both snapshots.
    """

    def test_method_changed_same_hash(self):
        """
        Repacking a member with a different method is a content difference.
        """
        self.assertEqual(DiffState.CONTENT,
                         classify_entry_pair(EntryRecord('x', S, 'H', ''),
                                             EntryRecord('x', D, 'H', '')))

    def test_metadata_changed(self):
        self.assertEqual(DiffState.METADATA,
                         classify_entry_pair(EntryRecord('x', S, 'H', ''),
                                             EntryRecord('x', S, 'H', 'ab')))

    def test_method_and_metadata_changed(self):
        """
        The content classification takes precedence over the metadata classification.
        """
        self.assertEqual(DiffState.CONTENT,
                         classify_entry_pair(EntryRecord('x', S, 'H', ''),
                                             EntryRecord('x', D, 'H', 'ab')))

    def test_hash_changed_same_method(self):
        """
        A different hash with the same method and metadata is not reported.
        """
        self.assertEqual(DiffState.EQUAL,
                         classify_entry_pair(EntryRecord('y', S, 'H1', ''),
                                             EntryRecord('y', S, 'H2', '')))

    def test_hash_and_method_changed(self):
        """
        Method and hash both changed: only differing metadata is reported.
        """
        self.assertEqual(DiffState.EQUAL,
                         classify_entry_pair(EntryRecord('y', S, 'H1', ''),
                                             EntryRecord('y', D, 'H2', '')))
        self.assertEqual(DiffState.METADATA,
                         classify_entry_pair(EntryRecord('y', S, 'H1', ''),
                                             EntryRecord('y', D, 'H2', '01')))

    def test_identical(self):
        record = EntryRecord('z', D, 'H', 'cafe')
        self.assertEqual(DiffState.EQUAL, classify_entry_pair(record, record))


class TestDiffAlgorithm(TestCase):
    """
    Tests the diffing algorithm.
    """

    first = Snapshot([
        EntryRecord('root/', S, '', ''),
        EntryRecord('root/only_first', S, 'h1', ''),
        EntryRecord('root/repacked', S, 'h2', ''),
        EntryRecord('root/new_meta', D, 'h3', ''),
        EntryRecord('root/changed', D, 'h4', ''),
        EntryRecord('root/same', D, 'h5', 'cafe'),
    ])
    second = Snapshot([
        EntryRecord('root/same', D, 'h5', 'cafe'),
        EntryRecord('root/changed', D, 'h4-changed', ''),
        EntryRecord('root/new_meta', D, 'h3', '0102'),
        EntryRecord('root/repacked', D, 'h2', ''),
        EntryRecord('root/only_second', S, 'h6', ''),
        EntryRecord('root/', S, '', ''),
        EntryRecord('zzz', S, 'h7', ''),
    ])

    def test_compute_snapshot_diff(self):
        """
        Diff with all difference categories.
        """
        expected = DiffReport(
            only_in_first=['root/only_first'],
            only_in_second=['root/only_second', 'zzz'],
            content_differing=['root/repacked'],
            metadata_differing=['root/new_meta'],
        )
        self.assertEqual(expected, compute_snapshot_diff(self.first, self.second))

    def test_symmetry(self):
        forward = compute_snapshot_diff(self.first, self.second)
        backward = compute_snapshot_diff(self.second, self.first)

        self.assertEqual(forward.only_in_first, backward.only_in_second)
        self.assertEqual(forward.only_in_second, backward.only_in_first)
        self.assertEqual(forward.content_differing, backward.content_differing)
        self.assertEqual(forward.metadata_differing, backward.metadata_differing)

    def test_self_diff_is_empty(self):
        self.assertTrue(compute_snapshot_diff(self.first, self.first).is_empty())

    def test_empty_snapshots(self):
        self.assertTrue(compute_snapshot_diff(Snapshot(), Snapshot()).is_empty())

        report = compute_snapshot_diff(Snapshot(), self.first)
        self.assertEqual(self.first.paths(), report.only_in_second)
        self.assertEqual([], report.only_in_first)

    def test_paths_reported_once(self):
        report = compute_snapshot_diff(self.first, self.second)
        paths = report.only_in_first + report.only_in_second + report.content_differing \
            + report.metadata_differing
        self.assertEqual(len(paths), len(set(paths)))

    def test_snapshots_not_modified(self):
        before = self.first.records()
        compute_snapshot_diff(self.first, self.second)
        self.assertEqual(before, self.first.records())

    def test_stats(self):
        stats = compute_snapshot_diff(self.first, self.second).stats()
        self.assertEqual({
            DiffState.ONLY_FIRST: 1,
            DiffState.ONLY_SECOND: 2,
            DiffState.CONTENT: 1,
            DiffState.METADATA: 1,
        }, stats)


class TestSnapshot(TestCase):
    """
    Tests the snapshot mapping.
    """

    def test_sorted_iteration(self):
        snapshot = Snapshot([EntryRecord('b', S, 'h'), EntryRecord('a/', S),
                             EntryRecord('A', D, 'h')])
        self.assertEqual(['A', 'a/', 'b'], list(snapshot))
        self.assertEqual(['A', 'a/', 'b'], [record.path for record in snapshot.records()])

    def test_put_overwrites(self):
        snapshot = Snapshot()
        snapshot.put(EntryRecord('a', S, 'h1'))
        snapshot.put(EntryRecord('a', D, 'h2'))

        self.assertEqual(1, len(snapshot))
        self.assertEqual(['a'], snapshot.paths())
        self.assertEqual(EntryRecord('a', D, 'h2'), snapshot.get('a'))

    def test_lookup(self):
        snapshot = Snapshot([EntryRecord('dir/', S)])
        self.assertIn('dir/', snapshot)
        self.assertNotIn('missing', snapshot)
        self.assertIsNone(snapshot.get('missing'))


class TestCompareFiles(TestCase):
    """
    Tests comparing encoded snapshot files.
    """

    def test_compare(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            first = pl.Path(tmp_dir) / 'first.txt'
            second = pl.Path(tmp_dir) / 'second.txt'
            first.write_text('a:S:h:\n1:/b:D:h:\n', encoding='utf8')
            second.write_text('a:S:h:01\n', encoding='utf8')

            report = ArchiveFingerprinter.compare(first, second)

        self.assertEqual(DiffReport(only_in_first=['a/b'], metadata_differing=['a']), report)

    def test_compare_missing_file(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            existing = pl.Path(tmp_dir) / 'first.txt'
            existing.write_text('a:S:h:\n', encoding='utf8')

            with self.assertRaises(InputNotFound) as context:
                ArchiveFingerprinter.compare(existing, pl.Path(tmp_dir) / 'missing.txt')

        self.assertTrue(context.exception.filename.endswith('missing.txt'))


if __name__ == '__main__':
    unittest.main()
