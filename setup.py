from setuptools import setup, find_packages

setup(
    name             = 'biofilters',
    version          = '1.0.0',
    description      = (
        'Command-line filters for sequencing and annotation data: GFF3 '
        'intron-length statistics, FASTQ quality trimming, table joins '
        'and FASTA utilities.'
    ),
    long_description = open('README.md').read(),
    long_description_content_type = 'text/markdown',
    license          = 'MIT',
    python_requires  = '>=3.7',
    packages         = find_packages(exclude=['tests']),
    py_modules       = ['intron_length', 'trim_quality', 'outer_join',
                        'average_columns', 'fasta_lengths', 'split_fasta'],
    entry_points     = {
        'console_scripts': [
            'intron_length   = intron_length:main',
            'trim_quality    = trim_quality:main',
            'outer_join      = outer_join:main',
            'average_columns = average_columns:main',
            'fasta_lengths   = fasta_lengths:main',
            'split_fasta     = split_fasta:main',
        ],
    },
    install_requires = [],   # standard library only
    extras_require   = {
        'dev': ['pytest>=7.0'],
    },
    classifiers = [
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering :: Bio-Informatics',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    keywords = (
        'bioinformatics GFF3 intron CDS exon FASTQ FASTA trimming '
        'outer-join command-line'
    ),
)
