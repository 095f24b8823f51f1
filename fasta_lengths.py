#!/usr/bin/env python3
"""
fasta_lengths.py
================
Print the length of every FASTA sequence as "id<TAB>length".

Usage
-----
    python fasta_lengths.py genome.fasta > lengths.tsv
    zcat genome.fa.gz | python fasta_lengths.py --total
"""

import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from biofilters.fasta_utils import read_fasta, sequence_lengths
from biofilters.streams     import iter_lines


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog        = 'fasta_lengths.py',
        description = 'Sequence lengths of FASTA records.',
    )
    p.add_argument('files', nargs='*', metavar='FILE',
                   help='FASTA files ("-" or none: stdin).')
    p.add_argument('--total', action='store_true',
                   help='Append a "total" line with the summed length.')
    return p


def main(argv=None):
    parser = build_parser()
    args   = parser.parse_args(argv)

    total = 0
    try:
        for seq_id, length in sequence_lengths(read_fasta(iter_lines(args.files))):
            print(f'{seq_id}\t{length}')
            total += length
    except OSError as exc:
        print(f'ERROR: cannot read input: {exc}', file=sys.stderr)
        return 1

    if args.total:
        print(f'total\t{total}')
    return 0


if __name__ == '__main__':
    sys.exit(main())
