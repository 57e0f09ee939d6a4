"""
Text Models Module
Defines the data structures passed between the tokenizer stages.
"""

import codecs
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from thaift.core.exceptions import ConfigurationError, EncodingConversionDefect

# Bytes that must survive encoding unchanged for byte-level whitespace splitting
_ASCII_SAMPLE = 'a \t\r\n'

# Strictly increasing character indices inside (0, n)
CutPoints = Tuple[int, ...]


class TokenType(int, Enum):
    """Token types understood by the indexing collaborator."""
    WORD = 1


class ParseMode(str, Enum):
    """Why the host is parsing: building the index or reading a search string."""
    INDEXING = 'indexing'
    QUERY = 'query'
    BOOLEAN_QUERY = 'boolean_query'


class Script(str, Enum):
    """Routing decision made for a chunk."""
    ALPHABETIC = 'alphabetic'
    AMBIGUOUS = 'ambiguous'


def canonical_encoding(encoding: str) -> str:
    """
    Resolve an encoding name through the codec registry.

    Args:
        encoding: Any alias known to Python (e.g. 'UTF8', 'tis620', 'cp874')

    Returns:
        str: Canonical codec name

    Raises:
        ConfigurationError: If the codec is unknown
    """
    try:
        return codecs.lookup(encoding).name
    except (LookupError, TypeError):
        raise ConfigurationError(f'Unknown encoding: {encoding!r}')


@dataclass(frozen=True)
class InputSpan:
    """
    Immutable view over the bytes of one document or query.
    """
    data: bytes
    encoding: str = 'utf-8'

    def __post_init__(self):
        if not isinstance(self.data, (bytes, bytearray, memoryview)):
            raise ConfigurationError(f'InputSpan data must be bytes, not {type(self.data).__name__}')
        object.__setattr__(self, 'data', bytes(self.data))
        name = canonical_encoding(self.encoding)
        try:
            sample = _ASCII_SAMPLE.encode(name)
        except UnicodeEncodeError:
            sample = b''
        if sample != _ASCII_SAMPLE.encode('ascii'):
            raise ConfigurationError(f'Encoding {name!r} is not ASCII-compatible')
        object.__setattr__(self, 'encoding', name)

    def __len__(self) -> int:
        return len(self.data)

    @classmethod
    def from_text(cls, text: str, encoding: str = 'utf-8') -> 'InputSpan':
        """Encode text and wrap it."""
        return cls(text.encode(encoding), encoding)


@dataclass(frozen=True)
class Chunk:
    """
    Whitespace-free byte sub-range of an InputSpan.
    """
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length

    def slice(self, span: InputSpan) -> bytes:
        return span.data[self.start:self.end]


@dataclass(frozen=True)
class Word:
    """
    Byte range of the original input handed to the indexing collaborator.
    """
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    def slice(self, span: InputSpan) -> bytes:
        return span.data[self.offset:self.end]

    def text(self, span: InputSpan) -> str:
        return self.slice(span).decode(span.encoding, errors='replace')


@dataclass(frozen=True)
class TokenMetadata:
    """
    Fixed record sent with every word.

    Only position changes from word to word; the boolean operator fields stay
    neutral because this parser does not interpret query syntax.
    """
    position: int
    token_type: TokenType = TokenType.WORD
    yesno: int = 0
    weight_adjust: int = 0
    wasign: int = 0
    trunc: bool = False
    prev: str = ' '
    quot: Optional[str] = None


@dataclass(frozen=True)
class CharWidthTable:
    """
    Per-character byte widths in the source and normalized encodings.
    """
    source: Tuple[int, ...]
    normalized: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.source)

    def source_offset(self, index: int) -> int:
        """Source byte offset of character `index` relative to the chunk start."""
        return sum(self.source[:index])

    def normalized_offset(self, index: int) -> int:
        """Byte offset of character `index` inside the normalized buffer."""
        return sum(self.normalized[:index])


@dataclass
class NormalizedBuffer:
    """
    A chunk re-encoded for the boundary segmenter.

    Lives for the processing of a single chunk.
    """
    data: bytes
    encoding: str
    text: str
    widths: CharWidthTable
    error_markers: List[bool] = field(default_factory=list)
    defects: List[EncodingConversionDefect] = field(default_factory=list)

    def __len__(self) -> int:
        """Number of logical characters."""
        return len(self.text)

    @property
    def has_defects(self) -> bool:
        return bool(self.defects)
