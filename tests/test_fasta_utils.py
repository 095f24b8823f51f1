#!/usr/bin/env python3
"""
test_fasta_utils.py
-------------------
Tests for FASTA streaming, sequence lengths and splitting.

Run:
    python -m pytest tests/test_fasta_utils.py -v
"""

import os
import shutil
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from biofilters.errors import SplitError
from biofilters.fasta_utils import (format_fasta, part_bounds, read_fasta,
                                    sequence_lengths, split_record, write_parts)
from biofilters.models import FastaRecord


FASTA = """\
junk before first header
>seq1 first sequence
ACGTACGTAC
GTAC
>seq2
AC GT

>seq3 empty
"""


class TestReadFasta(unittest.TestCase):

    def test_records(self):
        recs = list(read_fasta(FASTA.splitlines(True)))
        self.assertEqual([r.seq_id for r in recs], ['seq1', 'seq2', 'seq3'])
        self.assertEqual(recs[0].sequence, 'ACGTACGTACGTAC')
        self.assertEqual(recs[0].description, 'first sequence')
        self.assertEqual(recs[1].sequence, 'ACGT')
        self.assertEqual(recs[2].sequence, '')

    def test_lengths(self):
        lengths = list(sequence_lengths(read_fasta(FASTA.splitlines())))
        self.assertEqual(lengths, [('seq1', 14), ('seq2', 4), ('seq3', 0)])


class TestSplit(unittest.TestCase):

    def test_bounds_even(self):
        self.assertEqual(part_bounds(9, 3), [(1, 3), (4, 6), (7, 9)])

    def test_bounds_uneven(self):
        bounds = part_bounds(11, 3)
        self.assertEqual(bounds, [(1, 4), (5, 8), (9, 11)])
        sizes = [e - s + 1 for s, e in bounds]
        self.assertLessEqual(max(sizes) - min(sizes), 1)

    def test_bounds_invalid(self):
        with self.assertRaises(SplitError):
            part_bounds(10, 0)
        with self.assertRaises(SplitError):
            part_bounds(3, 4)

    def test_split_record(self):
        pieces = split_record(FastaRecord('chr', 'AAACCCGG'), 3)
        self.assertEqual([p.sequence for p in pieces], ['AAA', 'CCC', 'GG'])
        self.assertEqual(pieces[1].seq_id, 'chr_part2')
        self.assertEqual(pieces[1].description, '4-6')

    def test_format_fasta_wraps(self):
        text = format_fasta('x', 'A' * 130)
        self.assertEqual(text.splitlines(), ['>x', 'A' * 60, 'A' * 60, 'A' * 10])


class TestWriteParts(unittest.TestCase):

    def setUp(self):
        self.outdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.outdir)

    def test_files_written(self):
        pieces = split_record(FastaRecord('chr', 'ACGTACG'), 2)
        paths = write_parts(pieces, self.outdir, 'chunk')
        self.assertEqual([os.path.basename(p) for p in paths],
                         ['chunk_1.fasta', 'chunk_2.fasta'])
        with open(paths[1]) as fh:
            self.assertEqual(fh.read(), '>chr_part2 5-7\nACG\n')


if __name__ == '__main__':
    unittest.main()
