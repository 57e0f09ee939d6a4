"""
Word Emitter Module
Turns cut points back into byte ranges of the original input and hands each
word to the indexing collaborator.
"""

import logging
from typing import Iterator, List, Optional, Protocol, Sequence, Tuple

from thaift.conf import ErrorPolicy
from thaift.core.exceptions import CollaboratorRejection, SegmentationError
from thaift.text.models import CharWidthTable, Chunk, CutPoints, TokenMetadata, Word

logger = logging.getLogger(__name__)


class WordSink(Protocol):
    """
    Indexing collaborator receiving words.

    submit_word returns 0 when the word is accepted; any other status is a
    rejection. Raising CollaboratorRejection, or any other exception, is
    equivalent.
    """

    def submit_word(self, document_offset: int, byte_length: int, token_metadata: TokenMetadata) -> int:
        ...


class CollectingSink:
    """
    In-memory sink recording every submitted word.
    """

    def __init__(self):
        self.words: List[Word] = []
        self.metadata: List[TokenMetadata] = []

    def submit_word(self, document_offset: int, byte_length: int, token_metadata: TokenMetadata) -> int:
        self.words.append(Word(document_offset, byte_length))
        self.metadata.append(token_metadata)
        return 0

    def __len__(self) -> int:
        return len(self.words)

    def as_tuples(self) -> List[Tuple[int, int]]:
        """Return the words as (offset, length) pairs."""
        return [(w.offset, w.length) for w in self.words]


def iter_words(chunk: Chunk, source_widths: Sequence[int], cuts: CutPoints) -> Iterator[Word]:
    """
    Map cut points onto byte ranges of the original input.

    Byte lengths are accumulated from the per-character source widths, so
    multi-byte and mixed-width text keeps exact offsets. A segment made only
    of zero-width characters adds no bytes and is folded into its
    neighbours instead of producing an empty word.

    Args:
        chunk: Chunk the widths describe
        source_widths: Source byte width of every character of the chunk
        cuts: Internal cut points, in characters

    Yields:
        Word: Document-relative byte ranges covering the chunk

    Raises:
        SegmentationError: If the widths do not add up to the chunk length

    Example:
        >>> list(iter_words(Chunk(0, 30), [3] * 10, (3, 7)))
        [Word(offset=0, length=9), Word(offset=9, length=12), Word(offset=21, length=9)]
    """
    offset = chunk.start
    index = 0
    for end_index in list(cuts) + [len(source_widths)]:
        length = sum(source_widths[index:end_index])
        if length:
            yield Word(offset, length)
            offset += length
        index = end_index
    if offset != chunk.end:
        raise SegmentationError(
            f'Character widths cover {offset - chunk.start} of {chunk.length} bytes '
            f'in chunk at offset {chunk.start}'
        )


def emit_word(sink: WordSink, word: Word) -> int:
    """
    Submit one word with its metadata.

    Returns:
        int: Collaborator status (0 = accepted)
    """
    return sink.submit_word(word.offset, word.length, TokenMetadata(position=word.offset))


def submit(sink: WordSink, word: Word, policy: ErrorPolicy = ErrorPolicy.STRICT,
           rejections: Optional[List[CollaboratorRejection]] = None) -> int:
    """
    Submit a word and apply the error policy to the outcome.

    Any other exception raised by the sink counts as a rejection with
    status 1; the original exception is kept as its cause.

    Returns:
        int: 1 if the word was accepted, 0 if it was rejected under the
        permissive policy

    Raises:
        CollaboratorRejection: On rejection under the strict policy
    """
    try:
        try:
            status = emit_word(sink, word)
        except CollaboratorRejection:
            raise
        except Exception as e:
            raise CollaboratorRejection(word.offset, word.length) from e
        if status:
            raise CollaboratorRejection(word.offset, word.length, status)
    except CollaboratorRejection as rejection:
        if policy is ErrorPolicy.STRICT:
            raise
        logger.warning(f'Collaborator rejected word ({word.offset}, {word.length}): {rejection}')
        if rejections is not None:
            rejections.append(rejection)
        return 0
    return 1


def emit_words(chunk: Chunk, widths: CharWidthTable, cuts: CutPoints, sink: WordSink,
               policy: ErrorPolicy = ErrorPolicy.STRICT,
               rejections: Optional[List[CollaboratorRejection]] = None) -> int:
    """
    Submit every word of a segmented chunk.

    With the strict policy the first rejection is raised and nothing more is
    submitted. With the permissive policy rejections are logged, appended to
    `rejections` and the remaining words are still submitted.

    Args:
        chunk: Chunk being emitted
        widths: Width table produced by the normalizer
        cuts: Cut points produced by the segmenter
        sink: Indexing collaborator
        policy: Error policy for rejections
        rejections: Collects rejections under the permissive policy

    Returns:
        int: Number of accepted words

    Raises:
        CollaboratorRejection: Under the strict policy
    """
    accepted = 0
    for word in iter_words(chunk, widths.source, cuts):
        accepted += submit(sink, word, policy, rejections)
    return accepted


def emit_chunk(chunk: Chunk, sink: WordSink, policy: ErrorPolicy = ErrorPolicy.STRICT,
               rejections: Optional[List[CollaboratorRejection]] = None) -> int:
    """Submit a whole chunk as a single word."""
    return submit(sink, Word(chunk.start, chunk.length), policy, rejections)
