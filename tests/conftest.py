"""
Pytest configuration and shared fixtures.

This module provides:
- A deterministic dictionary segmenter standing in for pythainlp
- Sinks recording or rejecting submitted words
- Sample documents
"""
import sys
from pathlib import Path
from typing import List

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from thaift.conf import TokenizerConfig
from thaift.core.session import Tokenizer
from thaift.text.boundary_segmenter import CallableSegmenter
from thaift.text.word_emitter import CollectingSink

# Small Thai dictionary used by the fake segmenter
THAI_WORDS = ('สวัสดี', 'ครับ', 'ภาษา', 'ไทย', 'กิน', 'ข้าว')


def dictionary_tokenize(text: str) -> List[str]:
    """
    Longest-match segmentation over THAI_WORDS.

    Characters not covered by a dictionary word become one-character tokens.
    """
    tokens = []
    i = 0
    while i < len(text):
        match = max((w for w in THAI_WORDS if text.startswith(w, i)), key=len, default=None)
        step = len(match) if match else 1
        tokens.append(text[i:i + step])
        i += step
    return tokens


class RejectingSink(CollectingSink):
    """Sink refusing words that start at the given offsets."""

    def __init__(self, reject_offsets, status: int = 2):
        super().__init__()
        self.reject_offsets = set(reject_offsets)
        self.status = status
        self.attempts = []

    def submit_word(self, document_offset, byte_length, token_metadata):
        self.attempts.append((document_offset, byte_length))
        if document_offset in self.reject_offsets:
            return self.status
        return super().submit_word(document_offset, byte_length, token_metadata)


@pytest.fixture
def segmenter() -> CallableSegmenter:
    """Deterministic dictionary segmenter."""
    return CallableSegmenter(dictionary_tokenize)


@pytest.fixture
def sink() -> CollectingSink:
    """Sink collecting every word."""
    return CollectingSink()


@pytest.fixture
def tokenizer(segmenter) -> Tokenizer:
    """Strict tokenizer using the dictionary segmenter."""
    return Tokenizer(TokenizerConfig(), segmenter)


@pytest.fixture
def permissive_tokenizer(segmenter) -> Tokenizer:
    """Permissive tokenizer using the dictionary segmenter."""
    return Tokenizer(TokenizerConfig(error_policy='permissive'), segmenter)


@pytest.fixture(params=[
    '',
    '   \t\r\n ',
    'hello world',
    '  foo',
    'สวัสดีครับ',
    'hello สวัสดีครับ world',
    'กินข้าว\tภาษาไทย\r\nEnglish text',
    'ไทย123 abc ข้าว',
])
def sample_text(request) -> str:
    """Documents mixing Latin and Thai chunks."""
    return request.param


@pytest.fixture
def rejecting_sink():
    """Factory building sinks that refuse words at given offsets."""
    return RejectingSink
