"""
Configuration Module
Default settings for the thaift parser and the TokenizerConfig container.
"""

from dataclasses import dataclass
from enum import Enum

import regex as re

from thaift.core.exceptions import ConfigurationError

# Encoding expected by the dictionary segmenter (one byte per Thai character)
default_normalized_encoding = 'tis-620'

# pythainlp word_tokenize engine
default_segmenter_engine = 'newmm'

# First-character class that routes a chunk straight to the index (C-locale isalpha)
default_alphabetic_pattern = r'[A-Za-z]'

# Encoding assumed for str input
default_source_encoding = 'utf-8'


class ErrorPolicy(str, Enum):
    """How collaborator rejections propagate out of a parse call."""
    STRICT = 'strict'
    PERMISSIVE = 'permissive'


@dataclass
class TokenizerConfig:
    """
    Settings shared by every parse call of a Tokenizer.

    Attributes:
        normalized_encoding: Encoding handed to the boundary segmenter
        segmenter_engine: pythainlp engine name used by the default segmenter
        error_policy: 'strict' aborts on the first rejected word, 'permissive'
            processes the whole document and reports failure at the end
        strict_encoding: Raise on conversion defects instead of substituting
        alphabetic_pattern: Regex matched against the first character of a chunk
    """
    normalized_encoding: str = default_normalized_encoding
    segmenter_engine: str = default_segmenter_engine
    error_policy: ErrorPolicy = ErrorPolicy.STRICT
    strict_encoding: bool = False
    alphabetic_pattern: str = default_alphabetic_pattern

    def __post_init__(self) -> None:
        try:
            self.error_policy = ErrorPolicy(self.error_policy)
        except ValueError:
            raise ConfigurationError(f'Unknown error policy: {self.error_policy!r}')
        if not self.segmenter_engine:
            raise ConfigurationError('segmenter_engine must not be empty.')
        try:
            re.compile(self.alphabetic_pattern)
        except re.error as e:
            raise ConfigurationError(f'Invalid alphabetic_pattern: {e}')
