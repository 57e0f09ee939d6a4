"""
Host Plugin Module
Full-text parser entry points in the shape a search server expects.

Parser behaviour:
- All non-whitespace characters are word characters.
- Whitespace characters are space, tab, CR and LF.
- There is no minimum word length.
- A chunk starting with a Latin letter is indexed whole; any other chunk is
  cut into words by the Thai segmenter.

Every function returns 0 on success and non-zero on failure; exceptions
never cross this boundary.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from thaift.core.exceptions import ConfigurationError, TokenizerError
from thaift.core.session import Tokenizer
from thaift.text.models import InputSpan, ParseMode
from thaift.text.word_emitter import WordSink

logger = logging.getLogger(__name__)

PARSER_DESCRIPTOR = {
    'name': 'thaift_parser',
    'description': 'Thai Full-Text Parser',
    'author': 'Pruet Boonma and Vee Satayamas',
    'license': 'GPL',
    'version': 0x0001,
}

STATUS_OK = 0
STATUS_FAILED = 1


@dataclass
class ParserParam:
    """
    Parsing context supplied by the host for one call.

    Attributes:
        doc: Document or query bytes
        charset: Encoding of doc
        sink: Collaborator receiving the words
        mode: Why the host is parsing
        length: Number of bytes of doc to parse (all of it when omitted)
    """
    doc: bytes
    charset: str
    sink: WordSink
    mode: ParseMode = ParseMode.INDEXING
    length: Optional[int] = None


@lru_cache(maxsize=1)
def default_tokenizer() -> Tokenizer:
    """Tokenizer shared by parse calls that do not bring their own."""
    return Tokenizer()


def plugin_init(arg=None) -> int:
    """Called when the plugin is loaded. Does nothing."""
    return STATUS_OK


def plugin_deinit(arg=None) -> int:
    """Called when the plugin is unloaded. Does nothing."""
    return STATUS_OK


def session_init(param: Optional[ParserParam] = None) -> int:
    """Called on the first use of the parser in a statement. Does nothing."""
    return STATUS_OK


def session_deinit(param: Optional[ParserParam] = None) -> int:
    """Called at the end of a statement. Does nothing."""
    return STATUS_OK


def parse(param: ParserParam, tokenizer: Optional[Tokenizer] = None) -> int:
    """
    Parse a document or a search query.

    Splits the text into words and passes every word to the collaborator in
    param.sink. The parse mode only matters to the collaborator.

    Args:
        param: Parsing context
        tokenizer: Tokenizer to use (the shared default when omitted)

    Returns:
        int: STATUS_OK, or STATUS_FAILED if any stage failed or any word
        was rejected
    """
    tokenizer = tokenizer or default_tokenizer()
    length = len(param.doc) if param.length is None else param.length
    try:
        if not 0 <= length <= len(param.doc):
            raise ConfigurationError(f'Length {length} outside document of {len(param.doc)} bytes')
        span = InputSpan(param.doc[:length], param.charset)
        result = tokenizer.parse(span, param.sink, param.mode)
    except TokenizerError as e:
        logger.error(f'{PARSER_DESCRIPTOR["name"]}: parse failed: {e}')
        return STATUS_FAILED

    if not result.ok:
        logger.error(
            f'{PARSER_DESCRIPTOR["name"]}: {len(result.rejections)} of '
            f'{result.words + len(result.rejections)} word(s) rejected'
        )
        return STATUS_FAILED
    return STATUS_OK
