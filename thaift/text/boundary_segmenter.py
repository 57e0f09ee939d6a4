"""
Boundary Segmenter Module
Finds word boundaries inside text written without spaces between words.

The dictionary work is done by an external word tokenizer treated as an
oracle; this module only turns its output into cut points (character
indices) and checks that the output really partitions the input.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Iterable, List

from thaift.conf import default_segmenter_engine
from thaift.core.exceptions import DependencyError, SegmentationError
from thaift.text.models import CutPoints, NormalizedBuffer

logger = logging.getLogger(__name__)


def _load_word_tokenize():
    try:
        from pythainlp.tokenize import word_tokenize
    except ImportError as e:
        raise DependencyError(f'pythainlp is required for Thai word segmentation: {e}')
    return word_tokenize


def cuts_from_tokens(tokens: Iterable[str], text: str) -> CutPoints:
    """
    Convert a token list into internal cut points.

    The cut array is sized for the worst case of one cut per character.

    Args:
        tokens: Tokens whose concatenation must equal text
        text: Segmented text

    Returns:
        CutPoints: Strictly increasing indices in (0, len(text))

    Raises:
        SegmentationError: If the tokens do not rebuild text exactly
    """
    tokens = list(tokens)
    if ''.join(tokens) != text:
        raise SegmentationError(f'Segmenter tokens do not rebuild the input ({len(tokens)} tokens)')
    cuts = [0] * len(text)
    count = 0
    position = 0
    for token in tokens[:-1]:
        position += len(token)
        if 0 < position < len(text) and (count == 0 or position > cuts[count - 1]):
            cuts[count] = position
            count += 1
    return tuple(cuts[:count])


def validate_cuts(cuts: Iterable[int], length: int) -> CutPoints:
    """
    Check that cut points are strictly increasing and strictly inside the text.

    Raises:
        SegmentationError: On any out-of-range or unordered cut
    """
    cuts = tuple(cuts)
    previous = 0
    for cut in cuts:
        if not previous < cut < length:
            raise SegmentationError(f'Invalid cut point {cut} for text of {length} characters')
        previous = cut
    return cuts


class BoundarySegmenter(ABC):
    """
    Interface of a boundary-finder.

    Implementations must be deterministic and keep no per-call state, so a
    single instance can serve concurrent parse calls.
    """

    @abstractmethod
    def find_boundaries(self, buffer: NormalizedBuffer) -> CutPoints:
        """Return the internal cut points of the buffer's text."""

    @staticmethod
    def buffer_text(buffer: NormalizedBuffer) -> str:
        """Decode the normalized bytes back into the text the oracle reads."""
        text = buffer.data.decode(buffer.encoding, errors='replace')
        if len(text) != len(buffer):
            raise SegmentationError(
                f'Normalized buffer decodes to {len(text)} characters, expected {len(buffer)}'
            )
        return text


class PyThaiNLPSegmenter(BoundarySegmenter):
    """
    Dictionary-based Thai segmentation using pythainlp.

    Args:
        engine: pythainlp word_tokenize engine ('newmm', 'longest', 'icu', ...)
    """

    def __init__(self, engine: str = default_segmenter_engine):
        self.engine = engine

    def find_boundaries(self, buffer: NormalizedBuffer) -> CutPoints:
        if len(buffer) < 2:
            return ()
        word_tokenize = _load_word_tokenize()
        text = self.buffer_text(buffer)
        tokens = word_tokenize(text, engine=self.engine, keep_whitespace=True)
        cuts = cuts_from_tokens(tokens, text)
        logger.debug(f'{self.engine}: {len(text)} chars -> {len(cuts) + 1} words')
        return cuts

    def __repr__(self) -> str:
        return f'PyThaiNLPSegmenter(engine={self.engine!r})'


class CallableSegmenter(BoundarySegmenter):
    """
    Wrap any `text -> list of tokens` function as a boundary-finder.
    """

    def __init__(self, tokenize: Callable[[str], List[str]]):
        self.tokenize = tokenize

    def find_boundaries(self, buffer: NormalizedBuffer) -> CutPoints:
        if len(buffer) < 2:
            return ()
        text = self.buffer_text(buffer)
        return cuts_from_tokens(self.tokenize(text), text)


def get_segmenter(engine: str = default_segmenter_engine) -> BoundarySegmenter:
    """
    Build the default segmenter for a pythainlp engine name.

    Args:
        engine: Engine name

    Returns:
        BoundarySegmenter: Segmenter instance
    """
    return PyThaiNLPSegmenter(engine=engine)
