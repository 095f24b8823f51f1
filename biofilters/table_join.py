"""
table_join.py
-------------
Outer join of header-bearing delimited tables on their first column, and
column-wise averaging of tables that share one layout.

Outer join
----------
Every input contributes its non-key columns, in argument order.  The output
has one row per key found in any input, sorted by key; a key missing from a
table gets the placeholder in each of that table's columns.

Column average
--------------
All inputs must share the header, row count and column count.  The first
column is copied from the first table, every other cell is the mean of
that cell across tables.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from .errors import AverageError, InputFormatError, JoinError

DEFAULT_DELIMITER = '\t'
DEFAULT_MISSING = 'NA'


@dataclass
class Table:
    """A parsed delimited table; rows keep their original order."""
    name:   str
    header: List[str]
    rows:   List[List[str]] = field(default_factory=list)

    @property
    def width(self) -> int:
        return len(self.header)


def read_table(lines: Iterable[str], name: str,
               delimiter: str = DEFAULT_DELIMITER) -> Table:
    """
    Parse a table whose first non-blank line is the header.

    Raises InputFormatError when the input holds no header line.
    """
    table = None
    for line in lines:
        line = line.rstrip('\r\n')
        if not line:
            continue
        cols = line.split(delimiter)
        if table is None:
            table = Table(name, cols)
        else:
            table.rows.append(cols)
    if table is None:
        raise InputFormatError(f'{name}: file is empty')
    return table


def _index_by_key(table: Table) -> Dict[str, List[str]]:
    index: Dict[str, List[str]] = {}
    for lineno, row in enumerate(table.rows, 2):
        if len(row) != table.width:
            raise JoinError(
                f'{table.name}:{lineno}: expected {table.width} fields, '
                f'found {len(row)}')
        key = row[0]
        if key in index:
            raise JoinError(f'{table.name}:{lineno}: duplicate key "{key}"')
        index[key] = row[1:]
    return index


def outer_join(tables: List[Table],
               missing: str = DEFAULT_MISSING) -> Tuple[List[str], List[List[str]]]:
    """
    Join *tables* on their first column.

    Returns (header, rows).  Raises JoinError for fewer than two tables,
    duplicate keys inside one table or inconsistent field counts.
    """
    if len(tables) < 2:
        raise JoinError('outer join needs at least two files')
    indexes = [_index_by_key(t) for t in tables]

    header = [tables[0].header[0]]
    for table in tables:
        header.extend(table.header[1:])

    keys = sorted(set().union(*indexes))
    rows = []
    for key in keys:
        row = [key]
        for table, index in zip(tables, indexes):
            row.extend(index.get(key, [missing] * (table.width - 1)))
        rows.append(row)
    return header, rows


def format_number(value: float) -> str:
    """Integers print as such, other values with 6 significant digits."""
    if value.is_integer():
        return str(int(value))
    return f'{value:.6g}'


def average_columns(tables: List[Table]) -> Tuple[List[str], List[List[str]]]:
    """
    Average every column but the first across *tables*.

    Returns (header, rows).  Raises AverageError when the tables differ in
    header, row count or column count, or a value is not numeric.
    """
    if not tables:
        raise AverageError('no input tables')
    first = tables[0]
    for table in tables[1:]:
        if table.header != first.header:
            raise AverageError(f'{table.name}: header differs from '
                               f'{first.name}')
        if len(table.rows) != len(first.rows):
            raise AverageError(
                f'{table.name}: {len(table.rows)} rows, expected '
                f'{len(first.rows)}')

    rows = []
    for i, base_row in enumerate(first.rows):
        lineno = i + 2
        sums = [0.0] * (first.width - 1)
        for table in tables:
            row = table.rows[i]
            if len(row) != first.width:
                raise AverageError(
                    f'{table.name}:{lineno}: expected {first.width} fields, '
                    f'found {len(row)}')
            for j, cell in enumerate(row[1:]):
                try:
                    sums[j] += float(cell)
                except ValueError:
                    raise AverageError(
                        f'{table.name}:{lineno}: non-numeric value "{cell}"')
        n = len(tables)
        rows.append([base_row[0]] + [format_number(s / n) for s in sums])
    return list(first.header), rows
