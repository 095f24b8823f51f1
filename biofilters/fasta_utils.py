"""
fasta_utils.py
--------------
Streaming FASTA reading, sequence lengths, and splitting one sequence into
near-equal parts.

Conventions
-----------
  - SeqID    : first whitespace-delimited token after '>'
  - Sequence : whitespace removed, case preserved
  - Output   : wrapped at 60 characters per line
"""

import os
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import SplitError
from .models import FastaRecord

LINE_WIDTH = 60


def read_fasta(lines: Iterable[str]) -> Iterator[FastaRecord]:
    """
    Yield FastaRecord objects from an iterable of lines.

    Text before the first header is ignored.  Only the current record is
    held in memory.
    """
    current_id: Optional[str] = None
    description = ''
    chunks: List[str] = []

    for line in lines:
        line = line.rstrip('\r\n')
        if line.startswith('>'):
            if current_id is not None:
                yield FastaRecord(current_id, ''.join(chunks), description)
            header = line[1:].strip()
            parts = header.split(None, 1)
            current_id = parts[0] if parts else ''
            description = parts[1] if len(parts) > 1 else ''
            chunks = []
        elif current_id is not None:
            chunks.append(''.join(line.split()))

    if current_id is not None:
        yield FastaRecord(current_id, ''.join(chunks), description)


def sequence_lengths(records: Iterable[FastaRecord]) -> Iterator[Tuple[str, int]]:
    """Yield (seq_id, length) for every record."""
    for rec in records:
        yield rec.seq_id, len(rec)


def format_fasta(header: str, sequence: str, width: int = LINE_WIDTH) -> str:
    """Return a FASTA entry; *header* excludes the leading '>'."""
    lines = [f'>{header}']
    for i in range(0, len(sequence), width):
        lines.append(sequence[i:i + width])
    return '\n'.join(lines) + '\n'


def part_bounds(length: int, parts: int) -> List[Tuple[int, int]]:
    """
    Split [1, length] into *parts* contiguous 1-based inclusive ranges.

    Range lengths differ by at most one; the longer ranges come first.
    """
    if parts < 1:
        raise SplitError(f'number of parts must be at least 1, got {parts}')
    if parts > length:
        raise SplitError(
            f'cannot split a sequence of length {length} into {parts} parts')
    size, extra = divmod(length, parts)
    bounds = []
    start = 1
    for i in range(parts):
        end = start + size - 1 + (1 if i < extra else 0)
        bounds.append((start, end))
        start = end + 1
    return bounds


def split_record(record: FastaRecord, parts: int) -> List[FastaRecord]:
    """Partition *record* into *parts* FastaRecords named <id>_part<i>."""
    pieces = []
    for i, (start, end) in enumerate(part_bounds(len(record), parts), 1):
        pieces.append(FastaRecord(
            seq_id      = f'{record.seq_id}_part{i}',
            sequence    = record.sequence[start - 1:end],
            description = f'{start}-{end}',
        ))
    return pieces


def write_parts(
    pieces: List[FastaRecord],
    outdir: str,
    prefix: str,
    width: int = LINE_WIDTH,
) -> List[str]:
    """Write each piece to <outdir>/<prefix>_<i>.fasta; return the paths."""
    os.makedirs(outdir, exist_ok=True)
    paths = []
    for i, piece in enumerate(pieces, 1):
        path = os.path.join(outdir, f'{prefix}_{i}.fasta')
        header = f'{piece.seq_id} {piece.description}'.rstrip()
        with open(path, 'w') as fh:
            fh.write(format_fasta(header, piece.sequence, width))
        paths.append(path)
    return paths
