"""
fastq_trim.py
-------------
Trim trailing low-quality bases from FASTQ reads.

Older Illumina pipelines (quality encoding 1.5) mark the unreliable 3' end
of a read with a run of 'B' quality characters.  Trimming removes that run
from the quality string and the same number of bases from the sequence.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .errors import InputFormatError
from .models import FastqRecord

DEFAULT_QUALITY_CHAR = 'B'


@dataclass
class TrimStats:
    reads_in:  int = 0
    reads_out: int = 0
    bases_in:  int = 0
    bases_out: int = 0

    def format(self) -> str:
        return (f'reads_in\t{self.reads_in}\n'
                f'reads_out\t{self.reads_out}\n'
                f'bases_in\t{self.bases_in}\n'
                f'bases_out\t{self.bases_out}')


def read_fastq(lines: Iterable[str], source: str = '-') -> Iterator[FastqRecord]:
    """
    Group lines into 4-line FASTQ records.

    Raises InputFormatError for a truncated record, a header without '@',
    a separator without '+', or a sequence/quality length mismatch.
    """
    block = []
    lineno = 0
    for line in lines:
        lineno += 1
        block.append(line.rstrip('\r\n'))
        if len(block) < 4:
            continue
        header, seq, sep, qual = block
        block = []
        first = lineno - 3
        if not header.startswith('@'):
            raise InputFormatError(
                f'{source}:{first}: FASTQ header must start with "@"')
        if not sep.startswith('+'):
            raise InputFormatError(
                f'{source}:{first + 2}: FASTQ separator must start with "+"')
        if len(seq) != len(qual):
            raise InputFormatError(
                f'{source}:{first}: sequence and quality lengths differ '
                f'({len(seq)} vs {len(qual)})')
        yield FastqRecord(header[1:], seq, qual, sep[1:])

    # Ignore trailing blank lines, complain about anything else
    if any(line.strip() for line in block):
        raise InputFormatError(
            f'{source}: truncated FASTQ record at end of input')


def trim_record(record: FastqRecord,
                quality_char: str = DEFAULT_QUALITY_CHAR) -> FastqRecord:
    """Return a copy of *record* with the trailing quality_char run removed."""
    qual = record.quality.rstrip(quality_char)
    return FastqRecord(record.header, record.sequence[:len(qual)], qual,
                       record.comment)


def trim_reads(
    records: Iterable[FastqRecord],
    quality_char: str = DEFAULT_QUALITY_CHAR,
    min_length: int = 0,
    stats: Optional[TrimStats] = None,
) -> Iterator[FastqRecord]:
    """
    Trim every read and drop those shorter than *min_length* afterwards.

    When *stats* is given it is updated with read and base counts before
    and after filtering.
    """
    if len(quality_char) != 1:
        raise ValueError(f'quality character must be a single character, '
                         f'got {quality_char!r}')
    for record in records:
        trimmed = trim_record(record, quality_char)
        if stats is not None:
            stats.reads_in += 1
            stats.bases_in += len(record.sequence)
        if len(trimmed.sequence) < min_length:
            continue
        if stats is not None:
            stats.reads_out += 1
            stats.bases_out += len(trimmed.sequence)
        yield trimmed
