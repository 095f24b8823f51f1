#!/usr/bin/env python3
"""
outer_join.py
=============
Full outer join of two or more header-bearing tables on their first column.

Rows are sorted by key; a key absent from a file gets the placeholder
(default "NA") in each of that file's columns.

Usage
-----
    python outer_join.py counts_a.tsv counts_b.tsv counts_c.tsv > joined.tsv
    python outer_join.py --delimiter , --missing 0 a.csv b.csv

Exit codes
----------
  0 – Join written to stdout.
  1 – Fewer than two files, a duplicate key within one file, a row whose
      field count differs from its header, or an unreadable/empty file.
"""

import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from biofilters.errors     import InputFormatError
from biofilters.streams    import iter_lines, write_lines
from biofilters.table_join import (read_table, outer_join, DEFAULT_DELIMITER,
                                   DEFAULT_MISSING)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog        = 'outer_join.py',
        description = 'Outer join of delimited tables on the first column.',
        formatter_class = argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument('files', nargs='+', metavar='FILE',
                   help='Two or more header-bearing tables.')
    p.add_argument('--delimiter', default=DEFAULT_DELIMITER, metavar='D',
                   help='Field delimiter (default: tab).')
    p.add_argument('--missing', default=DEFAULT_MISSING, metavar='STR',
                   help='Placeholder for missing fields (default: NA).')
    return p


def main(argv=None):
    parser = build_parser()
    args   = parser.parse_args(argv)

    if len(args.files) < 2:
        print('ERROR: outer join needs at least two files', file=sys.stderr)
        return 1

    try:
        tables = [read_table(iter_lines([path]), path, args.delimiter)
                  for path in args.files]
        header, rows = outer_join(tables, args.missing)
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
