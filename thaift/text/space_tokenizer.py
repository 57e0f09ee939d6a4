"""
Space Tokenizer Module
Splits raw input bytes into whitespace-delimited chunks.

Whitespace is exactly space, tab, CR and LF. Scanning works on bytes, so a
multi-byte character is never mistaken for whitespace in any ASCII-compatible
encoding.
"""

from typing import Iterator

import regex as re

from thaift.text.models import Chunk, InputSpan

WHITESPACE_BYTES = frozenset(b' \t\r\n')

_CHUNK_PATTERN = re.compile(rb'[^ \t\r\n]+')


def is_whitespace_byte(value: int) -> bool:
    """Return True if the byte value is one of the four separator bytes."""
    return value in WHITESPACE_BYTES


def iter_chunks(span: InputSpan) -> Iterator[Chunk]:
    """
    Lazily yield the whitespace-delimited chunks of an input.

    Runs of whitespace are skipped, so no empty chunk is ever produced and an
    input made only of whitespace yields nothing.

    Args:
        span: Input to scan

    Yields:
        Chunk: Byte range of the next chunk, in document order

    Example:
        >>> [(c.start, c.length) for c in iter_chunks(InputSpan(b'  foo bar'))]
        [(2, 3), (6, 3)]
    """
    for match in _CHUNK_PATTERN.finditer(span.data):
        yield Chunk(match.start(), match.end() - match.start())
