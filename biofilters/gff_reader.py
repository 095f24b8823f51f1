"""
gff_reader.py
-------------
Stream GFF3 feature lines as AnnotationRecord objects.

Only the columns the intron scanner needs are interpreted; the attribute
column is carried along unparsed together with the raw line.

Tolerance
---------
The reader never aborts on a malformed line:
  * comment / pragma lines (starting with '#') and blank lines are skipped;
  * a '##FASTA' pragma ends the annotation section of the current source;
    the embedded sequences that follow are not feature lines;
  * lines with fewer than 9 columns are read best-effort as long as the
    type, start and end columns exist (strand '.' and empty attributes are
    assumed when missing);
  * lines whose coordinates are not integers are skipped with a warning on
    stderr.
"""

import sys
from typing import Iterator, List, Optional, TextIO

from .models import AnnotationRecord
from .streams import open_inputs

# GFF3 column indices
SEQID, SOURCE, TYPE, START, END, SCORE, STRAND, PHASE, ATTRIBUTES = range(9)

GFF3_COLUMNS = 9
MIN_COLUMNS = END + 1


def parse_gff_line(line: str) -> Optional[AnnotationRecord]:
    """
    Parse one feature line.

    Returns None for comments, blank lines and lines that cannot yield a
    feature type with integer coordinates.
    """
    line = line.rstrip('\r\n')
    if not line.strip() or line.startswith('#'):
        return None
    cols = line.split('\t')
    if len(cols) < MIN_COLUMNS:
        return None
    try:
        start = int(cols[START])
        end   = int(cols[END])
    except ValueError:
        return None
    strand = cols[STRAND] if len(cols) > STRAND else '.'
    attrs  = cols[ATTRIBUTES] if len(cols) > ATTRIBUTES else ''
    return AnnotationRecord(
        seq_id       = cols[SEQID],
        feature_type = cols[TYPE],
        start        = start,
        end          = end,
        strand       = strand,
        attributes   = attrs,
        raw          = line,
    )


def read_records(
    fh: TextIO,
    source: str = '-',
    diag: Optional[TextIO] = None,
) -> Iterator[AnnotationRecord]:
    """Yield AnnotationRecords from one open handle."""
    diag = diag if diag is not None else sys.stderr
    for lineno, line in enumerate(fh, 1):
        line = line.rstrip('\r\n')
        if line.startswith('##FASTA'):
            return
        if not line.strip() or line.startswith('#'):
            continue
        rec = parse_gff_line(line)
        if rec is None:
            print(f'[gff_reader] WARN: {source}:{lineno}: '
                  f'not a feature line, skipped: {line}', file=diag)
            continue
        ncols = line.count('\t') + 1
        if ncols != GFF3_COLUMNS:
            print(f'[gff_reader] WARN: {source}:{lineno}: expected '
                  f'{GFF3_COLUMNS} columns, found {ncols}', file=diag)
        yield rec


def iter_records(
    paths: Optional[List[str]],
    stdin: Optional[TextIO] = None,
    diag: Optional[TextIO] = None,
) -> Iterator[AnnotationRecord]:
    """
    Yield AnnotationRecords from all sources as one ordered stream.

    Parameters
    ----------
    paths : File names in processing order; None, [] or '-' read stdin.
    stdin : Handle used for '-' (defaults to sys.stdin).
    diag  : Stream for warnings about skipped lines (defaults to stderr).
    """
    for name, fh in open_inputs(paths, stdin):
        yield from read_records(fh, name, diag)
