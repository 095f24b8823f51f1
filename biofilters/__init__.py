"""
biofilters
----------
Library code behind the command-line filters: GFF3 intron scanning,
FASTQ quality trimming, tabular join/averaging and FASTA utilities.
"""

__version__ = '1.0.0'
