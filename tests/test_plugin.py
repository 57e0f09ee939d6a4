"""
Tests for thaift/plugin.py

Tests the host-facing entry points and their status codes.
"""

import pytest
from thaift import plugin
from thaift.core.session import Tokenizer
from thaift.text.boundary_segmenter import CallableSegmenter
from thaift.plugin import ParserParam, STATUS_FAILED, STATUS_OK
from thaift.text.models import ParseMode
from thaift.text.word_emitter import CollectingSink


class TestLifecycle:
    """Test the no-op lifecycle hooks."""

    @pytest.mark.parametrize("hook", [
        plugin.plugin_init,
        plugin.plugin_deinit,
        plugin.session_init,
        plugin.session_deinit,
    ])
    def test_hooks_succeed(self, hook):
        assert hook() == STATUS_OK

    def test_descriptor(self):
        assert plugin.PARSER_DESCRIPTOR['name'] == 'thaift_parser'
        assert plugin.PARSER_DESCRIPTOR['version'] == 0x0001


class TestParse:
    """Test parse() status handling."""

    def test_success(self, tokenizer, sink):
        param = ParserParam('hello สวัสดีครับ'.encode('utf-8'), 'utf-8', sink)
        assert plugin.parse(param, tokenizer) == STATUS_OK
        assert sink.as_tuples() == [(0, 5), (6, 18), (24, 12)]

    def test_length_limits_input(self, tokenizer, sink):
        param = ParserParam(b'hello world', 'utf-8', sink, length=5)
        assert plugin.parse(param, tokenizer) == STATUS_OK
        assert sink.as_tuples() == [(0, 5)]

    def test_query_mode(self, tokenizer, sink):
        param = ParserParam(b'find me', 'utf-8', sink, mode=ParseMode.BOOLEAN_QUERY)
        assert plugin.parse(param, tokenizer) == STATUS_OK
        assert sink.as_tuples() == [(0, 4), (5, 2)]

    def test_default_tokenizer_for_latin_text(self, sink):
        """Test that Latin-only input never reaches the segmenter."""
        assert plugin.parse(ParserParam(b'plain text', 'latin-1', sink)) == STATUS_OK
        assert isinstance(plugin.default_tokenizer(), Tokenizer)
        assert len(sink) == 2

    def test_rejection_reported(self, tokenizer, rejecting_sink):
        param = ParserParam(b'hello world', 'utf-8', rejecting_sink({6}))
        assert plugin.parse(param, tokenizer) == STATUS_FAILED

    def test_permissive_rejection_reported(self, permissive_tokenizer, rejecting_sink, caplog):
        sink = rejecting_sink({0})
        with caplog.at_level('ERROR', logger='thaift.plugin'):
            status = plugin.parse(ParserParam(b'hello world', 'utf-8', sink), permissive_tokenizer)
        assert status == STATUS_FAILED
        assert sink.attempts == [(0, 5), (6, 5)]
        assert 'rejected' in caplog.text

    def test_bad_charset(self, tokenizer, sink):
        assert plugin.parse(ParserParam(b'\xff\xfeh\x00', 'utf-16', sink), tokenizer) == STATUS_FAILED
        assert len(sink) == 0

    def test_unknown_mode(self, tokenizer, sink):
        """Test that an unknown parse mode is a failure status, not an exception."""
        param = ParserParam(b'hello', 'utf-8', sink, mode='bogus')
        assert plugin.parse(param, tokenizer) == STATUS_FAILED
        assert len(sink) == 0

    def test_sink_exception_is_failure(self, tokenizer):
        """Test that an exception raised by the sink becomes STATUS_FAILED."""
        class FullIndexSink(CollectingSink):
            def submit_word(self, *args):
                raise RuntimeError('index full')

        param = ParserParam(b'hello world', 'utf-8', FullIndexSink())
        assert plugin.parse(param, tokenizer) == STATUS_FAILED

    @pytest.mark.parametrize("length", [-1, -5, 12, 100])
    def test_length_out_of_range(self, tokenizer, sink, length):
        param = ParserParam(b'hello world', 'utf-8', sink, length=length)
        assert plugin.parse(param, tokenizer) == STATUS_FAILED
        assert len(sink) == 0

    @pytest.mark.parametrize("length,expected", [
        (0, []),
        (11, [(0, 5), (6, 5)]),
    ])
    def test_length_bounds_accepted(self, tokenizer, sink, length, expected):
        param = ParserParam(b'hello world', 'utf-8', sink, length=length)
        assert plugin.parse(param, tokenizer) == STATUS_OK
        assert sink.as_tuples() == expected

    def test_segmenter_crash_is_failure(self, sink):
        def crash(text):
            raise ValueError('engine not available')

        tokenizer = Tokenizer(segmenter=CallableSegmenter(crash))
        param = ParserParam('ภาษาไทย'.encode('utf-8'), 'utf-8', sink)
        assert plugin.parse(param, tokenizer) == STATUS_FAILED
