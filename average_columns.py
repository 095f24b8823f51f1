#!/usr/bin/env python3
"""
average_columns.py
==================
Average tables that share one layout (e.g. replicate runs): the first column
is copied, every other cell becomes the mean of that cell across files.

Usage
-----
    python average_columns.py rep1.tsv rep2.tsv rep3.tsv > mean.tsv

Exit codes
----------
  0 – Averages written to stdout.
  1 – Files differ in header, row count or column count, a value is not
      numeric, or a file cannot be read.
"""

import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from biofilters.errors     import InputFormatError
from biofilters.streams    import iter_lines, write_lines
from biofilters.table_join import read_table, average_columns, DEFAULT_DELIMITER


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog        = 'average_columns.py',
        description = 'Column-wise mean of identically shaped tables.',
        formatter_class = argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument('files', nargs='+', metavar='FILE',
                   help='Tables with identical header and shape.')
    p.add_argument('--delimiter', default=DEFAULT_DELIMITER, metavar='D',
                   help='Field delimiter (default: tab).')
    return p


def main(argv=None):
    parser = build_parser()
    args   = parser.parse_args(argv)

    try:
        tables = [read_table(iter_lines([path]), path, args.delimiter)
                  for path in args.files]
        header, rows = average_columns(tables)
    except InputFormatError as exc:
        print(f'ERROR: {exc}', file=sys.stderr)
        return 1
    except OSError as exc:
        print(f'ERROR: cannot read input: {exc}', file=sys.stderr)
        return 1

    write_lines((args.delimiter.join(r) for r in [header] + rows), sys.stdout)
    return 0


if __name__ == '__main__':
    sys.exit(main())
