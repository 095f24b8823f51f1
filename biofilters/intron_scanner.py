"""
intron_scanner.py
-----------------
Intron-length statistics from an ordered GFF3 feature stream.

Ordering assumption
-------------------
Within one transcript, exonic features (the configured type, CDS or exon)
are expected in ascending start order on the '+' strand and in descending
order on the '-' strand, and the transcript record (mRNA, or gene when no
mRNA exists) precedes its children.  This is how gene predictors and most
annotation pipelines write GFF3.  Files that break the assumption are not
rejected; the numbers are then best-effort.

Gap length
----------
For consecutive exonic features A (previous in file order) and B:
  '+' / '.' strand : B.start - A.end   - 1
  '-' strand       : A.start - B.end   - 1
The first exonic feature of a transcript has gap 0.  Zero or negative gaps
mean touching or overlapping features; they never move the minimum but are
added to the per-transcript sum.

Results
-------
  min_intron_length            smallest positive gap (sentinel if none)
  max_intron_length            largest gap (0 if none is positive)
  max_cumulative_intron_length largest per-transcript sum of gaps
"""

import sys
from dataclasses import dataclass, replace
from typing import Iterable, Optional, TextIO

from .models import (AnnotationRecord, FlankPair, GlobalStats,
                     TranscriptAggregate, TRANSCRIPT_TYPES)


DEFAULT_FEATURE_TYPE = 'exon'


@dataclass(frozen=True)
class ScannerConfig:
    """
    Options fixed for the whole run.

    feature_type      : Feature type whose consecutive records bound introns.
    report_flanking   : Print the records around the min and max gap at the end.
    warn_below        : Warn for every gap with 0 < gap < warn_below.
    warn_above        : Warn for every gap with gap > warn_above.
    report_cumulative : Include the max cumulative length in the result line.
    """
    feature_type:      str = DEFAULT_FEATURE_TYPE
    report_flanking:   bool = False
    warn_below:        Optional[int] = None
    warn_above:        Optional[int] = None
    report_cumulative: bool = True


def gap_length(aggregate: TranscriptAggregate, record: AnnotationRecord) -> int:
    """Bases strictly between the previous exonic feature and *record*."""
    if aggregate.boundary is None:
        return 0
    if record.is_reverse:
        return aggregate.boundary - record.end - 1
    return record.start - aggregate.boundary - 1


def advance(
    aggregate: TranscriptAggregate,
    record: AnnotationRecord,
    stats: GlobalStats,
    config: ScannerConfig,
    diag: Optional[TextIO] = None,
) -> TranscriptAggregate:
    """
    Fold one record into the scan and return the new transcript aggregate.

    *stats* is updated in place; threshold warnings go to *diag*.
    """
    if record.feature_type in TRANSCRIPT_TYPES:
        aggregate = TranscriptAggregate()

    if record.feature_type != config.feature_type:
        return aggregate

    gap = gap_length(aggregate, record)
    boundary = record.start if record.is_reverse else record.end
    cumulative = aggregate.cumulative_intron_length + gap
    flanks = (aggregate.previous_feature, record)

    if cumulative > stats.max_cumulative_intron_length:
        stats.max_cumulative_intron_length = cumulative
    if 0 < gap < stats.min_intron_length:
        stats.min_intron_length = gap
        stats.min_flank_pair = flanks
    if gap > stats.max_intron_length:
        stats.max_intron_length = gap
        stats.max_flank_pair = flanks

    if config.warn_below is not None and 0 < gap < config.warn_below:
        _warn(diag, f'intron of length {gap} is shorter than '
                    f'{config.warn_below}', flanks)
    if config.warn_above is not None and gap > config.warn_above:
        _warn(diag, f'intron of length {gap} is longer than '
                    f'{config.warn_above}', flanks)

    return replace(aggregate,
                   boundary=boundary,
                   cumulative_intron_length=cumulative,
                   previous_feature=record)


def _warn(diag: Optional[TextIO], message: str, flanks: FlankPair) -> None:
    diag = diag if diag is not None else sys.stderr
    print(f'[intron_scanner] WARN: {message}', file=diag)
    for rec in flanks:
        if rec is not None:
            print(rec, file=diag)


class IntronScanner:
    """
    Single-pass scanner holding one live transcript aggregate and the
    global extrema.

    Usage
    -----
        scanner = IntronScanner(ScannerConfig(feature_type='CDS'))
        stats = scanner.scan(records)
        print(scanner.format_result())
    """

    def __init__(
        self,
        config: Optional[ScannerConfig] = None,
        diag: Optional[TextIO] = None,
    ):
        self.config = config or ScannerConfig()
        self.diag = diag
        self.stats = GlobalStats()
        self.aggregate = TranscriptAggregate()

    def feed(self, record: AnnotationRecord) -> None:
        self.aggregate = advance(self.aggregate, record, self.stats,
                                 self.config, self.diag)

    def scan(self, records: Iterable[AnnotationRecord]) -> GlobalStats:
        for record in records:
            self.feed(record)
        return self.stats

    def format_result(self) -> str:
        """Tab-separated result line without the trailing newline."""
        fields = [self.stats.min_intron_length, self.stats.max_intron_length]
        if self.config.report_cumulative:
            fields.append(self.stats.max_cumulative_intron_length)
        return '\t'.join(str(v) for v in fields)

    def write_flanking_report(self, out: Optional[TextIO] = None) -> None:
        """Print the min and max gap with their two flanking records."""
        out = out if out is not None else sys.stderr
        for label, value, pair in (
            ('min', self.stats.min_intron_length, self.stats.min_flank_pair),
            ('max', self.stats.max_intron_length, self.stats.max_flank_pair),
        ):
            print(f'{label} intron length: {value}', file=out)
            if pair is None:
                print('  (no flanking features)', file=out)
                continue
            for rec in pair:
                if rec is not None:
                    print(rec, file=out)


def scan_records(
    records: Iterable[AnnotationRecord],
    config: Optional[ScannerConfig] = None,
    diag: Optional[TextIO] = None,
) -> GlobalStats:
    """Convenience wrapper: run a fresh scanner over *records*."""
    return IntronScanner(config, diag).scan(records)
