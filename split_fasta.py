#!/usr/bin/env python3
"""
split_fasta.py
==============
Cut one FASTA sequence into N contiguous pieces of near-equal length
(lengths differ by at most one base) and write each to its own file.

Output files
------------
    <outdir>/<prefix>_1.fasta ... <outdir>/<prefix>_N.fasta
Each holds one record ">ID_partI START-END" with 60-column lines.
Only the first sequence of the input is split.

Usage
-----
    python split_fasta.py --parts 4 --outdir chunks/ chr1.fasta
"""

import argparse
import contextlib
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from biofilters.errors      import SplitError
from biofilters.fasta_utils import read_fasta, split_record, write_parts
from biofilters.streams     import iter_lines


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog        = 'split_fasta.py',
        description = 'Split one FASTA sequence into near-equal parts.',
        formatter_class = argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument('file', nargs='?', default='-', metavar='FILE',
                   help='FASTA file ("-" or none: stdin).')
    p.add_argument('--parts', type=int, required=True, metavar='N',
                   help='Number of pieces.')
    p.add_argument('--outdir', default='.', metavar='DIR',
                   help='Output directory (default: current dir).')
    p.add_argument('--prefix', default='', metavar='STR',
                   help='Output file prefix (default: sequence ID).')
    return p


def main(argv=None):
    parser = build_parser()
    args   = parser.parse_args(argv)

    try:
        with contextlib.closing(iter_lines([args.file])) as lines:
            record = next(read_fasta(lines), None)
        if record is None or not record.sequence:
            raise SplitError('input holds no sequence')
        pieces = split_record(record, args.parts)
        paths = write_parts(pieces, args.outdir, args.prefix or record.seq_id)
    except SplitError as exc:
        print(f'ERROR: {exc}', file=sys.stderr)
        return 1
    except OSError as exc:
        print(f'ERROR: {exc}', file=sys.stderr)
        return 1

    print(f'[split_fasta] {record.seq_id}: {len(record)} bp in '
          f'{len(paths)} part(s) under {args.outdir}/', file=sys.stderr)
    return 0


if __name__ == '__main__':
    sys.exit(main())
