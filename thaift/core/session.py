"""
Tokenizer Session Module
Drives one parse call through the tokenizer stages.

A session walks the input chunk by chunk:

    IDLE -> SCANNING -> EMITTING_ALPHABETIC_WORD -> SCANNING ...
                     -> NORMALIZING -> SEGMENTING -> EMITTING_SEGMENTED_WORDS -> SCANNING ...
                     -> DONE

Any fatal error moves the session to FAILED and is re-raised to the caller.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from thaift.conf import TokenizerConfig, default_source_encoding
from thaift.core.exceptions import (
    CollaboratorRejection,
    ConfigurationError,
    SegmentationError,
    SessionError,
    TokenizerError,
)
from thaift.text.boundary_segmenter import BoundarySegmenter, get_segmenter, validate_cuts
from thaift.text.encoding_normalizer import normalize
from thaift.text.models import Chunk, InputSpan, ParseMode, Script, Word
from thaift.text.script_classifier import classify
from thaift.text.space_tokenizer import iter_chunks
from thaift.text.word_emitter import CollectingSink, WordSink, emit_chunk, emit_words

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = 'idle'
    SCANNING = 'scanning'
    EMITTING_ALPHABETIC_WORD = 'emitting_alphabetic_word'
    NORMALIZING = 'normalizing'
    SEGMENTING = 'segmenting'
    EMITTING_SEGMENTED_WORDS = 'emitting_segmented_words'
    DONE = 'done'
    FAILED = 'failed'


@dataclass
class ParseResult:
    """
    Outcome of a parse call.
    """
    words: int = 0
    chunks: int = 0
    defects: int = 0
    rejections: List[CollaboratorRejection] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every submitted word was accepted."""
        return not self.rejections


class TokenizerSession:
    """
    State for a single parse call.

    Sessions are single-use and own every per-chunk buffer they create, so
    concurrent parse calls never share mutable state.

    Args:
        span: Input to tokenize
        sink: Indexing collaborator receiving the words
        segmenter: Boundary-finder for ambiguous chunks
        mode: Host parse mode, passed through untouched
        config: Tokenizer settings

    Raises:
        ConfigurationError: If mode is not a known parse mode
    """

    def __init__(self, span: InputSpan, sink: WordSink, segmenter: BoundarySegmenter,
                 mode: ParseMode = ParseMode.INDEXING, config: Optional[TokenizerConfig] = None):
        self.span = span
        self.sink = sink
        self.segmenter = segmenter
        try:
            self.mode = ParseMode(mode)
        except ValueError:
            raise ConfigurationError(f'Unknown parse mode: {mode!r}')
        self.config = config or TokenizerConfig()
        self.state = SessionState.IDLE
        self.result = ParseResult()

    def run(self) -> ParseResult:
        """
        Tokenize the whole input.

        Returns:
            ParseResult: Counts of chunks, accepted words and rejections

        Raises:
            SessionError: If the session already ran
            TokenizerError: Any fatal error raised by a stage
        """
        if self.state is not SessionState.IDLE:
            raise SessionError(f'Session already used (state: {self.state.value})')

        logger.debug(f'Parsing {len(self.span)} bytes ({self.span.encoding}, mode={self.mode.value})')
        try:
            self.state = SessionState.SCANNING
            for chunk in iter_chunks(self.span):
                self.result.chunks += 1
                self._process_chunk(chunk)
                self.state = SessionState.SCANNING
        except Exception:
            self.state = SessionState.FAILED
            raise

        self.state = SessionState.DONE
        logger.debug(
            f'Parsed {self.result.chunks} chunk(s) into {self.result.words} word(s), '
            f'{len(self.result.rejections)} rejected'
        )
        return self.result

    def _process_chunk(self, chunk: Chunk) -> None:
        policy = self.config.error_policy
        rejections = self.result.rejections

        if classify(self.span, chunk, self.config.alphabetic_pattern) is Script.ALPHABETIC:
            self.state = SessionState.EMITTING_ALPHABETIC_WORD
            self.result.words += emit_chunk(chunk, self.sink, policy, rejections)
            return

        buffer = None
        try:
            self.state = SessionState.NORMALIZING
            buffer = normalize(self.span, chunk, self.config.normalized_encoding,
                               strict=self.config.strict_encoding)
            self.result.defects += len(buffer.defects)

            self.state = SessionState.SEGMENTING
            cuts = validate_cuts(self._find_boundaries(buffer, chunk), len(buffer))
            logger.debug(f'Chunk ({chunk.start}, {chunk.length}): {len(buffer)} chars, cuts {cuts}')

            self.state = SessionState.EMITTING_SEGMENTED_WORDS
            self.result.words += emit_words(chunk, buffer.widths, cuts, self.sink, policy, rejections)
        finally:
            del buffer

    def _find_boundaries(self, buffer, chunk: Chunk):
        try:
            return self.segmenter.find_boundaries(buffer)
        except TokenizerError:
            raise
        except Exception as e:
            raise SegmentationError(
                f'Segmenter {self.segmenter!r} failed on chunk ({chunk.start}, {chunk.length}): {e}'
            ) from e


class Tokenizer:
    """
    Reusable front end creating one TokenizerSession per parse call.

    Holds only read-only settings and a stateless segmenter, so one instance
    may be shared between threads.

    Args:
        config: Tokenizer settings (defaults when omitted)
        segmenter: Boundary-finder; built from config.segmenter_engine when omitted
    """

    def __init__(self, config: Optional[TokenizerConfig] = None,
                 segmenter: Optional[BoundarySegmenter] = None):
        self.config = config or TokenizerConfig()
        self.segmenter = segmenter or get_segmenter(self.config.segmenter_engine)

    def parse(self, span: InputSpan, sink: WordSink, mode: ParseMode = ParseMode.INDEXING) -> ParseResult:
        """
        Tokenize an input and submit its words to a sink.

        Args:
            span: Input to tokenize
            sink: Indexing collaborator
            mode: Host parse mode

        Returns:
            ParseResult: Outcome of the call
        """
        session = TokenizerSession(span, sink, self.segmenter, mode, self.config)
        return session.run()

    def tokenize(self, data: Union[bytes, str], encoding: str = default_source_encoding) -> List[Word]:
        """
        Tokenize and return the words instead of submitting them.

        Args:
            data: Raw bytes, or text encoded with `encoding` first
            encoding: Source encoding

        Returns:
            list[Word]: Words in document order
        """
        span = InputSpan.from_text(data, encoding) if isinstance(data, str) else InputSpan(data, encoding)
        sink = CollectingSink()
        self.parse(span, sink)
        return sink.words

    def __repr__(self) -> str:
        return f'Tokenizer(segmenter={self.segmenter!r}, policy={self.config.error_policy.value})'


def tokenize(data: Union[bytes, str], encoding: str = default_source_encoding,
             config: Optional[TokenizerConfig] = None,
             segmenter: Optional[BoundarySegmenter] = None) -> List[Word]:
    """
    Convenience helper tokenizing a single input with a throwaway Tokenizer.
    """
    return Tokenizer(config, segmenter).tokenize(data, encoding)
