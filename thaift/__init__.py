"""
thaift
Thai full-text parser: splits documents and queries into indexable words
with exact byte offsets.
"""

from thaift.conf import TokenizerConfig, ErrorPolicy
from thaift.core.session import Tokenizer, TokenizerSession, ParseResult, SessionState, tokenize
from thaift.text.models import InputSpan, Word, ParseMode

__version__ = '0.1.0'

__all__ = [
    'TokenizerConfig',
    'ErrorPolicy',
    'Tokenizer',
    'TokenizerSession',
    'ParseResult',
    'SessionState',
    'tokenize',
    'InputSpan',
    'Word',
    'ParseMode',
]
