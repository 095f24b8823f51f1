#!/usr/bin/env python3
"""
intron_length.py
================
Report the shortest intron, the longest intron and the longest total
intron length of any single transcript in GFF3 annotation.

Introns are the gaps between consecutive CDS (or exon) features of one
mRNA.  Features must be listed in transcript order: ascending coordinates on
the '+' strand, descending on the '-' strand, each mRNA (or gene, when the
file has no mRNA features) before its children.

Output (stdout)
---------------
    MIN<TAB>MAX<TAB>MAX_CUMULATIVE        (MAX_CUMULATIVE omitted with
                                           --no-cumulative)
When no positive intron is found MIN stays at 1000000000.

Usage
-----
    python intron_length.py --type CDS annotation.gff3
    cat a.gff3 b.gff3 | python intron_length.py --type exon --show-flanking

Legacy assignments
------------------
The older KEY=VALUE form is still accepted among the file arguments:
    python intron_length.py TYPE=CDS SHOW_FLANKING=1 \\
        WARN_INTRON_LESS_THAN=20 WARN_INTRON_GREATER_THAN=50000 annotation.gff3

Diagnostics (stderr)
--------------------
  --warn-less-than N     report every intron shorter than N (and > 0)
  --warn-greater-than N  report every intron longer than N
  --show-flanking        after the run, print the min and max intron with
                         the two features around each
Warnings never change the numbers on stdout.
"""

import argparse
import os
import sys
from typing import List, Optional

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from biofilters.gff_reader     import iter_records
from biofilters.intron_scanner import (IntronScanner, ScannerConfig,
                                       DEFAULT_FEATURE_TYPE)


# KEY=VALUE name → command-line option
LEGACY_OPTIONS = {
    'TYPE':                     '--type',
    'SHOW_FLANKING':            '--show-flanking',
    'WARN_INTRON_LESS_THAN':    '--warn-less-than',
    'WARN_INTRON_GREATER_THAN': '--warn-greater-than',
}

FALSE_VALUES = ('', '0', 'false', 'no')


# ─────────────────────────────────────────────────────────────────────────────
# CLI
# ─────────────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog        = 'intron_length.py',
        description = 'Minimum, maximum and maximum per-transcript intron '
                      'length from GFF3.',
        formatter_class = argparse.RawDescriptionHelpFormatter,
        epilog      = __doc__.split('Legacy assignments')[1],
    )
    p.add_argument('files', nargs='*', metavar='FILE',
                   help='GFF3 files, read in order ("-" or none: stdin).')

    cfg = p.add_argument_group('Scan')
    cfg.add_argument('--type', default=DEFAULT_FEATURE_TYPE, metavar='TYPE',
                     dest='feature_type',
                     help='Feature type bounding introns: CDS or exon '
                          '(default: exon).')
    cfg.add_argument('--no-cumulative', action='store_true',
                     help='Print only MIN and MAX.')

    dia = p.add_argument_group('Diagnostics (stderr)')
    dia.add_argument('--show-flanking', action='store_true',
                     help='Print the features around the min and max intron.')
    dia.add_argument('--warn-less-than', type=int, default=None, metavar='INT',
                     help='Warn for introns shorter than INT.')
    dia.add_argument('--warn-greater-than', type=int, default=None,
                     metavar='INT',
                     help='Warn for introns longer than INT.')
    return p


def translate_legacy_args(argv: List[str]) -> List[str]:
    """
    Rewrite KEY=VALUE assignments (TYPE=CDS, SHOW_FLANKING=1, ...) into
    the equivalent options.  Other arguments pass through unchanged.
    """
    out: List[str] = []
    for arg in argv:
        key, sep, value = arg.partition('=')
        if not sep or key not in LEGACY_OPTIONS:
            out.append(arg)
            continue
        option = LEGACY_OPTIONS[key]
        if option == '--show-flanking':
            if value.strip().lower() not in FALSE_VALUES:
                out.append(option)
        else:
            out.append(f'{option}={value}')
    return out


def config_from_args(args) -> ScannerConfig:
    return ScannerConfig(
        feature_type      = args.feature_type or DEFAULT_FEATURE_TYPE,
        report_flanking   = args.show_flanking,
        warn_below        = args.warn_less_than,
        warn_above        = args.warn_greater_than,
        report_cumulative = not args.no_cumulative,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Main logic
# ─────────────────────────────────────────────────────────────────────────────

def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()
    args   = parser.parse_args(translate_legacy_args(argv))
    config = config_from_args(args)

    scanner = IntronScanner(config, diag=sys.stderr)
    try:
        scanner.scan(iter_records(args.files, diag=sys.stderr))
    except OSError as exc:
        print(f'ERROR: cannot read input: {exc}', file=sys.stderr)
        return 1

    print(scanner.format_result())
    if config.report_flanking:
        scanner.write_flanking_report(sys.stderr)
    return 0


if __name__ == '__main__':
    sys.exit(main())
