"""
errors.py
---------
Exceptions raised by the library modules.  Command-line entry points catch
these and turn them into an ``ERROR:`` message plus exit code 1.
"""


class InputFormatError(ValueError):
    """Input text does not follow the record layout a filter expects."""


class JoinError(InputFormatError):
    """Tables handed to the outer join cannot be merged."""


class AverageError(InputFormatError):
    """Tables handed to the column averager do not share one structure."""


class SplitError(ValueError):
    """A sequence cannot be partitioned as requested."""
