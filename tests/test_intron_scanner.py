#!/usr/bin/env python3
"""
test_intron_scanner.py
----------------------
Tests for the intron-length scanner.

Tests:
  1. Plus-strand gap formula, first feature gives 0
  2. Minus-strand gap formula
  3. Reset on mRNA / gene records
  4. Zero / negative gaps never lower the minimum
  5. Cumulative length sums raw gaps
  6. Threshold warnings (stderr only, stdout unchanged)
  7. Flanking report
  8. Worked example: CDS on both strands → 54 / 1091 / 2659
  9. Repeated runs give identical output

Run:
    python -m pytest tests/test_intron_scanner.py -v
"""

import io
import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from biofilters.gff_reader import read_records
from biofilters.intron_scanner import (IntronScanner, ScannerConfig,
                                       advance, gap_length, scan_records)
from biofilters.models import (AnnotationRecord, GlobalStats,
                               TranscriptAggregate, MIN_INTRON_SENTINEL)


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _rec(ftype, start, end, strand='+', seq_id='Chr1', attrs='') -> AnnotationRecord:
    raw = '\t'.join([seq_id, 'test', ftype, str(start), str(end), '.',
                     strand, '.', attrs])
    return AnnotationRecord(seq_id, ftype, start, end, strand, attrs, raw)


def _transcript(strand, intervals, ftype='CDS', with_gene=True):
    lo = min(s for s, _ in intervals)
    hi = max(e for _, e in intervals)
    recs = []
    if with_gene:
        recs.append(_rec('gene', lo, hi, strand))
    recs.append(_rec('mRNA', lo, hi, strand))
    recs.extend(_rec(ftype, s, e, strand) for s, e in intervals)
    return recs


def _scan(records, **kwargs):
    diag = io.StringIO()
    scanner = IntronScanner(ScannerConfig(**kwargs), diag=diag)
    scanner.scan(records)
    return scanner, diag.getvalue()


PLUS_CDS = [
    (3629085, 3629477), (3630569, 3630670), (3630773, 3630910),
    (3631019, 3631079), (3632021, 3632145), (3632563, 3632622),
]
MINUS_CDS = [(8775373, 8775489), (8775304, 8775318)]

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')
EXAMPLE_GFF3 = os.path.join(DATA_DIR, 'worked_example.gff3')

with open(EXAMPLE_GFF3) as _fh:
    WORKED_EXAMPLE = _fh.read()


# ─────────────────────────────────────────────────────────────────────────────
# Gap formula
# ─────────────────────────────────────────────────────────────────────────────

class TestGapLength(unittest.TestCase):

    def test_first_feature_has_no_gap(self):
        self.assertEqual(gap_length(TranscriptAggregate(), _rec('CDS', 500, 700)), 0)

    def test_plus_strand(self):
        agg = TranscriptAggregate(boundary=300)
        self.assertEqual(gap_length(agg, _rec('CDS', 500, 700, '+')), 199)

    def test_unstranded_treated_as_forward(self):
        agg = TranscriptAggregate(boundary=300)
        self.assertEqual(gap_length(agg, _rec('CDS', 500, 700, '.')), 199)

    def test_minus_strand(self):
        agg = TranscriptAggregate(boundary=500)
        self.assertEqual(gap_length(agg, _rec('CDS', 100, 300, '-')), 199)

    def test_advance_sets_strand_dependent_boundary(self):
        cfg = ScannerConfig(feature_type='CDS')
        stats = GlobalStats()
        plus = advance(TranscriptAggregate(), _rec('CDS', 100, 300, '+'), stats, cfg)
        minus = advance(TranscriptAggregate(), _rec('CDS', 100, 300, '-'), stats, cfg)
        self.assertEqual(plus.boundary, 300)
        self.assertEqual(minus.boundary, 100)

    def test_advance_returns_new_aggregate(self):
        cfg = ScannerConfig(feature_type='CDS')
        before = TranscriptAggregate()
        after = advance(before, _rec('CDS', 100, 300), GlobalStats(), cfg)
        self.assertIsNone(before.boundary)
        self.assertIsNot(before, after)


# ─────────────────────────────────────────────────────────────────────────────
# Scanning
# ─────────────────────────────────────────────────────────────────────────────

class TestScanner(unittest.TestCase):

    def test_plus_strand_transcript(self):
        scanner, _ = _scan(_transcript('+', [(100, 300), (500, 700), (800, 900)]),
                           feature_type='CDS')
        stats = scanner.stats
        self.assertEqual(stats.min_intron_length, 99)
        self.assertEqual(stats.max_intron_length, 199)
        self.assertEqual(stats.max_cumulative_intron_length, 298)

    def test_minus_strand_transcript(self):
        scanner, _ = _scan(_transcript('-', [(800, 900), (500, 700), (100, 300)]),
                           feature_type='CDS')
        stats = scanner.stats
        self.assertEqual(stats.min_intron_length, 99)
        self.assertEqual(stats.max_intron_length, 199)
        self.assertEqual(stats.max_cumulative_intron_length, 298)

    def test_default_feature_type_is_exon(self):
        recs = _transcript('+', [(100, 300), (500, 700)], ftype='CDS')
        scanner, _ = _scan(recs)
        self.assertEqual(scanner.stats.max_intron_length, 0)
        self.assertFalse(scanner.stats.has_introns)

        recs = _transcript('+', [(100, 300), (500, 700)], ftype='exon')
        scanner, _ = _scan(recs)
        self.assertEqual(scanner.stats.max_intron_length, 199)

    def test_other_types_ignored(self):
        recs = [
            _rec('mRNA', 100, 900),
            _rec('CDS', 100, 300),
            _rec('five_prime_UTR', 350, 360),
            _rec('exon', 400, 420),
            _rec('CDS', 500, 700),
        ]
        scanner, _ = _scan(recs, feature_type='CDS')
        self.assertEqual(scanner.stats.min_intron_length, 199)

    def test_back_to_back_single_exon_transcripts_do_not_leak(self):
        recs = (_transcript('+', [(100, 200)], with_gene=False)
                + _transcript('+', [(5000, 5100)], with_gene=False))
        scanner, _ = _scan(recs, feature_type='CDS')
        self.assertEqual(scanner.stats.max_intron_length, 0)
        self.assertEqual(scanner.stats.min_intron_length, MIN_INTRON_SENTINEL)
        self.assertEqual(scanner.stats.max_cumulative_intron_length, 0)

    def test_gene_without_mrna_resets(self):
        recs = [
            _rec('gene', 100, 300), _rec('CDS', 100, 300),
            _rec('gene', 9000, 9500), _rec('CDS', 9000, 9100),
            _rec('CDS', 9200, 9500),
        ]
        scanner, _ = _scan(recs, feature_type='CDS')
        self.assertEqual(scanner.stats.max_intron_length, 99)

    def test_features_before_any_transcript(self):
        recs = [_rec('CDS', 100, 300), _rec('CDS', 400, 500)]
        scanner, _ = _scan(recs, feature_type='CDS')
        self.assertEqual(scanner.stats.min_intron_length, 99)

    def test_overlap_does_not_lower_minimum(self):
        recs = _transcript('+', [(100, 300), (301, 400), (350, 500), (600, 700)])
        scanner, _ = _scan(recs, feature_type='CDS')
        stats = scanner.stats
        self.assertEqual(stats.min_intron_length, 99)
        self.assertEqual(stats.max_intron_length, 99)

    def test_all_gaps_non_positive(self):
        recs = _transcript('+', [(100, 300), (301, 400), (390, 500)])
        scanner, _ = _scan(recs, feature_type='CDS')
        stats = scanner.stats
        self.assertEqual(stats.min_intron_length, MIN_INTRON_SENTINEL)
        self.assertEqual(stats.max_intron_length, 0)
        self.assertIsNone(stats.max_flank_pair)
        self.assertEqual(scanner.format_result(), f'{MIN_INTRON_SENTINEL}\t0\t0')

    def test_cumulative_sums_raw_gaps(self):
        # gaps: 0, 99, -51, 99 → running sum 0, 99, 48, 147
        recs = _transcript('+', [(100, 200), (300, 400), (350, 450), (550, 600)])
        scanner, _ = _scan(recs, feature_type='CDS')
        self.assertEqual(scanner.stats.max_cumulative_intron_length, 147)

    def test_cumulative_is_max_over_transcripts(self):
        recs = (_transcript('+', [(100, 200), (1201, 1300)])
                + _transcript('-', [(9000, 9100), (8000, 8100), (7000, 7100)]))
        scanner, _ = _scan(recs, feature_type='CDS')
        self.assertEqual(scanner.stats.max_cumulative_intron_length, 1798)

    def test_ties_keep_first_flank_pair(self):
        recs = _transcript('+', [(100, 200), (301, 400), (501, 600)])
        scanner, _ = _scan(recs, feature_type='CDS')
        prev, cur = scanner.stats.min_flank_pair
        self.assertEqual((prev.start, cur.start), (100, 301))
        prev, cur = scanner.stats.max_flank_pair
        self.assertEqual((prev.start, cur.start), (100, 301))

    def test_two_value_result(self):
        scanner, _ = _scan(_transcript('+', [(100, 300), (500, 700)]),
                           feature_type='CDS', report_cumulative=False)
        self.assertEqual(scanner.format_result(), '199\t199')


# ─────────────────────────────────────────────────────────────────────────────
# Diagnostics
# ─────────────────────────────────────────────────────────────────────────────

class TestDiagnostics(unittest.TestCase):

    def test_warn_below(self):
        recs = _transcript('+', [(100, 200), (211, 300), (401, 500), (505, 600)])
        scanner, diag = _scan(recs, feature_type='CDS', warn_below=20)
        warnings = [l for l in diag.splitlines() if 'WARN' in l]
        self.assertEqual(len(warnings), 2)
        self.assertIn('intron of length 10 is shorter than 20', warnings[0])
        self.assertIn('intron of length 4 is shorter than 20', warnings[1])
        self.assertEqual(scanner.stats.min_intron_length, 4)

    def test_warn_below_prints_flanks(self):
        first, second = _rec('CDS', 100, 200), _rec('CDS', 211, 300)
        scanner, diag = _scan([_rec('mRNA', 100, 300), first, second],
                              feature_type='CDS', warn_below=20)
        lines = diag.splitlines()
        self.assertEqual(lines[1], first.raw)
        self.assertEqual(lines[2], second.raw)

    def test_warn_below_ignores_non_positive(self):
        recs = _transcript('+', [(100, 200), (150, 300)])
        _, diag = _scan(recs, feature_type='CDS', warn_below=20)
        self.assertEqual(diag, '')

    def test_warn_above(self):
        recs = _transcript('+', [(100, 200), (5201, 5300), (5401, 5500)])
        _, diag = _scan(recs, feature_type='CDS', warn_above=1000)
        warnings = [l for l in diag.splitlines() if 'WARN' in l]
        self.assertEqual(len(warnings), 1)
        self.assertIn('intron of length 5000 is longer than 1000', warnings[0])

    def test_warnings_do_not_change_result(self):
        recs = _transcript('+', [(100, 200), (211, 300), (5401, 5500)])
        plain, _ = _scan(recs, feature_type='CDS')
        warned, diag = _scan(recs, feature_type='CDS', warn_below=50,
                             warn_above=100)
        self.assertTrue(diag)
        self.assertEqual(plain.format_result(), warned.format_result())

    def test_flanking_report(self):
        recs = _transcript('+', [(100, 200), (211, 300), (5401, 5500)])
        scanner, _ = _scan(recs, feature_type='CDS')
        out = io.StringIO()
        scanner.write_flanking_report(out)
        lines = out.getvalue().splitlines()
        self.assertEqual(lines[0], 'min intron length: 10')
        self.assertEqual(lines[1], recs[2].raw)
        self.assertEqual(lines[2], recs[3].raw)
        self.assertEqual(lines[3], 'max intron length: 5100')
        self.assertEqual(lines[4], recs[3].raw)
        self.assertEqual(lines[5], recs[4].raw)

    def test_flanking_report_without_introns(self):
        scanner, _ = _scan(_transcript('+', [(100, 200)]), feature_type='CDS')
        out = io.StringIO()
        scanner.write_flanking_report(out)
        self.assertIn('(no flanking features)', out.getvalue())


# ─────────────────────────────────────────────────────────────────────────────
# End to end
# ─────────────────────────────────────────────────────────────────────────────

class TestWorkedExample(unittest.TestCase):

    def test_records_built_in_code(self):
        recs = _transcript('+', PLUS_CDS) + _transcript('-', MINUS_CDS)
        stats = scan_records(recs, ScannerConfig(feature_type='CDS'))
        self.assertEqual(stats.min_intron_length, 54)
        self.assertEqual(stats.max_intron_length, 1091)
        self.assertEqual(stats.max_cumulative_intron_length, 2659)

    def test_from_gff_text(self):
        recs = read_records(io.StringIO(WORKED_EXAMPLE), diag=io.StringIO())
        scanner, _ = _scan(recs, feature_type='CDS')
        self.assertEqual(scanner.format_result(), '54\t1091\t2659')

    def test_exon_type_on_same_text(self):
        # only one exon line → no intron at all
        recs = read_records(io.StringIO(WORKED_EXAMPLE), diag=io.StringIO())
        scanner, _ = _scan(recs, feature_type='exon')
        self.assertEqual(scanner.format_result(), f'{MIN_INTRON_SENTINEL}\t0\t0')

    def test_repeated_runs_identical(self):
        results = []
        for _ in range(2):
            recs = read_records(io.StringIO(WORKED_EXAMPLE), diag=io.StringIO())
            scanner, _ = _scan(recs, feature_type='CDS', warn_below=200)
            results.append(scanner.format_result())
        self.assertEqual(results[0], results[1])


if __name__ == '__main__':
    unittest.main()
