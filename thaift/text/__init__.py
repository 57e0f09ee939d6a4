"""
Text Module
Provides the tokenizer stages: chunking, classification, normalization,
segmentation and word emission.
"""

from .models import (
    InputSpan,
    Chunk,
    Word,
    TokenMetadata,
    TokenType,
    ParseMode,
    Script,
    CharWidthTable,
    NormalizedBuffer
)
from .space_tokenizer import iter_chunks, is_whitespace_byte
from .script_classifier import classify
from .encoding_normalizer import normalize, max_bytes_per_char
from .boundary_segmenter import (
    BoundarySegmenter,
    PyThaiNLPSegmenter,
    CallableSegmenter,
    get_segmenter
)
from .word_emitter import WordSink, CollectingSink, iter_words, emit_words, emit_chunk

__all__ = [
    # Models
    'InputSpan',
    'Chunk',
    'Word',
    'TokenMetadata',
    'TokenType',
    'ParseMode',
    'Script',
    'CharWidthTable',
    'NormalizedBuffer',
    # Space tokenizer
    'iter_chunks',
    'is_whitespace_byte',
    # Script classifier
    'classify',
    # Encoding normalizer
    'normalize',
    'max_bytes_per_char',
    # Boundary segmenter
    'BoundarySegmenter',
    'PyThaiNLPSegmenter',
    'CallableSegmenter',
    'get_segmenter',
    # Word emitter
    'WordSink',
    'CollectingSink',
    'iter_words',
    'emit_words',
    'emit_chunk',
]
