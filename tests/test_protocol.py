#!/usr/bin/env python3
"""
Unit tests for the JSON clipboard frame format.

Tests encoding, tolerant parsing of malformed or foreign frames, and log
previews.
"""
import json

from clipsync.protocol import (
    MAX_CONTENT_SIZE,
    SyncMessage,
    encode_message,
    parse_frame,
    preview,
)


def test_encode_message_fields() -> None:
    """Test encoded frame carries type, content and source."""
    frame = encode_message(SyncMessage(content="hello", source="laptop"))
    assert json.loads(frame) == {"type": "clipboard", "content": "hello", "source": "laptop"}


def test_encode_message_keeps_non_ascii() -> None:
    """Test non-ASCII text is not escaped."""
    frame = encode_message(SyncMessage(content="portapapeles ñ 📋", source="a"))
    assert "ñ 📋" in frame


def test_parse_frame_clipboard() -> None:
    """Test a valid clipboard frame parses to a SyncMessage."""
    message = parse_frame('{"type":"clipboard","content":"world","source":"peer1"}')
    assert message == SyncMessage(content="world", source="peer1")


def test_parse_frame_bytes() -> None:
    """Test binary frames holding UTF-8 JSON are accepted."""
    message = parse_frame(b'{"type":"clipboard","content":"x","source":"p"}')
    assert message is not None
    assert message.content == "x"


def test_parse_frame_ignores_other_types() -> None:
    """Test frames of other types are ignored, not errors."""
    assert parse_frame('{"type":"ping"}') is None


def test_parse_frame_invalid_json() -> None:
    """Test frames that are not JSON are dropped."""
    assert parse_frame("not json{") is None


def test_parse_frame_non_object() -> None:
    """Test JSON values other than objects are dropped."""
    assert parse_frame('["clipboard", "x"]') is None


def test_parse_frame_invalid_utf8() -> None:
    """Test binary frames that are not UTF-8 are dropped."""
    assert parse_frame(b"\xff\xfe\x00") is None


def test_parse_frame_content_must_be_text() -> None:
    """Test clipboard frames without string content are dropped."""
    assert parse_frame('{"type":"clipboard","content":42,"source":"p"}') is None
    assert parse_frame('{"type":"clipboard","source":"p"}') is None


def test_parse_frame_missing_source_is_unknown() -> None:
    """Test a missing source tag is treated as a foreign origin."""
    message = parse_frame('{"type":"clipboard","content":"x"}')
    assert message is not None
    assert message.source == "unknown"


def test_parse_frame_oversized_content() -> None:
    """Test content beyond the size limit is dropped."""
    frame = encode_message(SyncMessage(content="a" * (MAX_CONTENT_SIZE + 1), source="p"))
    assert parse_frame(frame) is None


def test_preview_truncates_long_content() -> None:
    """Test preview keeps the first 50 characters only."""
    assert preview("short") == "short"
    assert preview("x" * 80) == "x" * 50 + "..."
