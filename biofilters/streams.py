"""
streams.py
----------
Input handling shared by every filter.

File arguments are read in the order given and behave like one
concatenated stream.  An empty argument list, or the name '-', stands for
standard input.
"""

import io
import sys
from typing import Iterable, Iterator, List, Optional, TextIO, Tuple

STDIN_NAME = '-'


def input_names(paths: Optional[List[str]]) -> List[str]:
    """Return the list of sources to read, defaulting to stdin."""
    return list(paths) if paths else [STDIN_NAME]


def open_inputs(
    paths: Optional[List[str]],
    stdin: Optional[TextIO] = None,
) -> Iterator[Tuple[str, TextIO]]:
    """
    Yield (name, handle) for every input source in order.

    Files are opened lazily and closed once the caller moves on to the next
    source.  OSError from an unreadable file propagates to the caller.
    """
    for name in input_names(paths):
        if name == STDIN_NAME:
            if stdin is not None:
                yield name, stdin
            else:
                yield from _stdin_source(name)
            continue
        with open(name, 'r', encoding='utf-8', errors='replace') as fh:
            yield name, fh


def iter_lines(
    paths: Optional[List[str]],
    stdin: Optional[TextIO] = None,
) -> Iterator[str]:
    """Yield every line (newline stripped) of all sources, in order."""
    for _, fh in open_inputs(paths, stdin):
        for line in fh:
            yield line.rstrip('\r\n')


def write_lines(lines: Iterable[str], out: TextIO) -> int:
    """Write lines to *out*, newline-terminated; return the count."""
    count = 0
    for line in lines:
        out.write(line + '\n')
        count += 1
    return count


def _stdin_source(name: str) -> Iterator[Tuple[str, TextIO]]:
    """
    Yield sys.stdin decoded like the files: UTF-8 with undecodable bytes
    replaced.  Handles without a byte buffer are used as they are.
    """
    buffer = getattr(sys.stdin, 'buffer', None)
    if buffer is None:
        yield name, sys.stdin
        return
    wrapper = io.TextIOWrapper(buffer, encoding='utf-8', errors='replace')
    try:
        yield name, wrapper
    finally:
        # leave sys.stdin.buffer open for the interpreter
        wrapper.detach()
