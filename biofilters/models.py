"""
models.py
---------
Data classes shared by the filters: annotation records and the running
state of the intron scanner, plus simple FASTA/FASTQ record holders.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


# Printed verbatim as the minimum when no positive intron was ever seen.
MIN_INTRON_SENTINEL = 1000000000

# Feature types that open a new transcript group.
TRANSCRIPT_TYPES = ('mRNA', 'gene')


@dataclass(frozen=True)
class AnnotationRecord:
    """
    One row of a 9-column GFF3 feature table.

    Attributes
    ----------
    seq_id       : str  Reference sequence / chromosome name (column 1).
    feature_type : str  Feature type, e.g. gene, mRNA, CDS, exon (column 3).
    start        : int  1-based inclusive start (column 4).
    end          : int  1-based inclusive end (column 5), start <= end.
    strand       : str  '+', '-' or '.' (column 7).
    attributes   : str  Column 9, kept unparsed.
    raw          : str  The original line without its newline, used when
                        printing flanking features.
    """
    seq_id:       str
    feature_type: str
    start:        int
    end:          int
    strand:       str = '.'
    attributes:   str = ''
    raw:          str = ''

    @property
    def is_reverse(self) -> bool:
        return self.strand == '-'

    def __str__(self) -> str:
        if self.raw:
            return self.raw
        return '\t'.join([self.seq_id, '.', self.feature_type,
                          str(self.start), str(self.end), '.',
                          self.strand, '.', self.attributes])


FlankPair = Tuple[Optional[AnnotationRecord], AnnotationRecord]


@dataclass(frozen=True)
class TranscriptAggregate:
    """
    Running state for the transcript currently being read.

    A fresh (empty) aggregate is produced whenever an mRNA or gene record
    is seen; it is replaced, never mutated, for every exonic record.

    Attributes
    ----------
    boundary                 : Trailing edge of the previous exonic feature:
                               its end on the forward strand, its start on
                               the reverse strand.  None until the first
                               exonic feature of the transcript.
    cumulative_intron_length : Sum of all gaps seen so far in the transcript.
    previous_feature         : Last exonic record of the transcript.
    """
    boundary:                 Optional[int] = None
    cumulative_intron_length: int = 0
    previous_feature:         Optional[AnnotationRecord] = None


@dataclass
class GlobalStats:
    """
    Extrema accumulated over the whole input stream.

    min_flank_pair / max_flank_pair hold the (previous, current) exonic
    records around the smallest and largest gap; the first occurrence is
    kept when several gaps tie.
    """
    min_intron_length:            int = MIN_INTRON_SENTINEL
    max_intron_length:            int = 0
    max_cumulative_intron_length: int = 0
    min_flank_pair:               Optional[FlankPair] = None
    max_flank_pair:               Optional[FlankPair] = None

    @property
    def has_introns(self) -> bool:
        """False while the minimum still holds the sentinel value."""
        return self.min_flank_pair is not None


@dataclass
class FastqRecord:
    """A single 4-line FASTQ entry (header without '@')."""
    header:   str
    sequence: str
    quality:  str
    comment:  str = ''   # text after '+' on the separator line

    def format(self) -> str:
        return (f'@{self.header}\n{self.sequence}\n'
                f'+{self.comment}\n{self.quality}\n')


@dataclass
class FastaRecord:
    """
    A FASTA entry.

    seq_id is the first whitespace-delimited token of the header;
    description holds the rest of the header line (may be empty).
    """
    seq_id:      str
    sequence:    str
    description: str = ''

    def __len__(self) -> int:
        return len(self.sequence)
