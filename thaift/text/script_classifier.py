"""
Script Classifier Module
Routes a chunk either straight to the index or through word segmentation.
"""

from functools import lru_cache

import regex as re

from thaift.conf import default_alphabetic_pattern
from thaift.text.models import Chunk, InputSpan, Script


@lru_cache(maxsize=None)
def _compile(pattern: str):
    return re.compile(pattern)


# Compiled once at import, shared read-only by every parse call
ALPHABETIC_CLASS = _compile(default_alphabetic_pattern)


def first_character(span: InputSpan, chunk: Chunk) -> str:
    """
    Decode the first character of a chunk.

    Reads at most four bytes, enough for any character of a supported
    encoding. An undecodable lead byte gives U+FFFD.
    """
    head = span.data[chunk.start:min(chunk.end, chunk.start + 4)]
    return head.decode(span.encoding, errors='replace')[:1]


def classify(span: InputSpan, chunk: Chunk, alphabetic_pattern: str = default_alphabetic_pattern) -> Script:
    """
    Decide how a chunk is tokenized.

    Only the first character is inspected: if it is an alphabetic letter the
    whole chunk is indexed as one word, otherwise it goes to the boundary
    segmenter. A chunk mixing Latin and Thai is classified by whichever
    script it starts with.

    Args:
        span: Input the chunk belongs to
        chunk: Chunk to classify
        alphabetic_pattern: Character class counted as alphabetic

    Returns:
        Script: ALPHABETIC or AMBIGUOUS
    """
    pattern = ALPHABETIC_CLASS if alphabetic_pattern == default_alphabetic_pattern else _compile(alphabetic_pattern)
    if pattern.match(first_character(span, chunk)):
        return Script.ALPHABETIC
    return Script.AMBIGUOUS
