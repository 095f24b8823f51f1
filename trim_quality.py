#!/usr/bin/env python3
"""
trim_quality.py
===============
Strip the trailing run of a low-quality marker character (default 'B')
from FASTQ reads and optionally drop reads that become too short.

Usage
-----
    python trim_quality.py reads.fastq > trimmed.fastq
    zcat reads.fastq.gz | python trim_quality.py --min-length 30 --stats

Arguments
---------
  FILE ...            FASTQ files, read in order ("-" or none: stdin).
  --quality-char C    Quality character whose trailing run is removed
                      (default: B).
  --min-length N      Drop reads shorter than N after trimming (default: 0).
  --stats             Print read and base counts to stderr when done.
"""

import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from biofilters.errors     import InputFormatError
from biofilters.fastq_trim import (read_fastq, trim_reads, TrimStats,
                                   DEFAULT_QUALITY_CHAR)
from biofilters.streams    import iter_lines


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog        = 'trim_quality.py',
        description = 'Trim trailing low-quality bases from FASTQ reads.',
        formatter_class = argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument('files', nargs='*', metavar='FILE',
                   help='FASTQ files ("-" or none: stdin).')
    p.add_argument('--quality-char', default=DEFAULT_QUALITY_CHAR,
                   metavar='C',
                   help='Trailing quality character to strip (default: B).')
    p.add_argument('--min-length', type=int, default=0, metavar='N',
                   help='Minimum read length after trimming (default: 0).')
    p.add_argument('--stats', action='store_true',
                   help='Report read/base counts on stderr.')
    return p


def main(argv=None):
    parser = build_parser()
    args   = parser.parse_args(argv)

    if len(args.quality_char) != 1:
        parser.error('--quality-char must be a single character')

    stats = TrimStats() if args.stats else None
    try:
        reads = read_fastq(iter_lines(args.files))
        for rec in trim_reads(reads, args.quality_char, args.min_length,
                              stats):
            sys.stdout.write(rec.format())
    except InputFormatError as exc:
        print(f'ERROR: {exc}', file=sys.stderr)
        return 1
    except OSError as exc:
        print(f'ERROR: cannot read input: {exc}', file=sys.stderr)
        return 1

    if stats is not None:
        print(stats.format(), file=sys.stderr)
    return 0


if __name__ == '__main__':
    sys.exit(main())
