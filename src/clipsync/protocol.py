#!/usr/bin/env python3
"""
JSON wire format for clipboard frames.

Each WebSocket text frame carries exactly one object:

    {"type": "clipboard", "content": "<text>", "source": "<endpoint-tag>"}

The transport provides message boundaries, so no extra framing is needed.
Inbound frames that do not parse, or that carry another type, are expected
traffic from mixed peers and are reported as None rather than raised.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from clipsync.constants import PREVIEW_LENGTH

logger = logging.getLogger(__name__)

MESSAGE_TYPE: str = "clipboard"

# Source tag assumed when a peer omits one.
UNKNOWN_SOURCE: str = "unknown"

# Maximum UTF-8 size of clipboard content (10 MB).
# Prevents memory exhaustion from extremely large clipboard data.
MAX_CONTENT_SIZE: int = 10485760


@dataclass(frozen=True)
class SyncMessage:
    """
    One clipboard update on the wire.

    Attributes:
        content: Clipboard text, never truncated.
        source: Echo tag of the sending endpoint.
        type: Always "clipboard" for messages this module produces.
    """

    content: str
    source: str
    type: str = MESSAGE_TYPE


def encode_message(message: SyncMessage) -> str:
    """
    Encode a SyncMessage as a compact JSON text frame.

    Args:
        message: The message to encode.

    Returns:
        JSON string with non-ASCII characters kept verbatim.
    """
    payload = {"type": message.type, "content": message.content, "source": message.source}
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def validate_content_size(content: str) -> bool:
    """
    Check if content size is within the allowed limit.

    Args:
        content: Clipboard text to validate.

    Returns:
        True if its UTF-8 encoding is at most MAX_CONTENT_SIZE bytes.
    """
    return len(content.encode("utf-8")) <= MAX_CONTENT_SIZE


def parse_frame(frame: str | bytes) -> SyncMessage | None:
    """
    Decode an inbound frame into a SyncMessage.

    Args:
        frame: Raw text or binary WebSocket frame.

    Returns:
        The decoded clipboard message, or None if the frame is malformed,
        oversized, or of a type other than "clipboard".
    """
    if isinstance(frame, bytes):
        try:
            frame = frame.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Dropping binary frame that is not UTF-8")
            return None
    try:
        data = json.loads(frame)
    except json.JSONDecodeError:
        logger.debug("Dropping frame that is not JSON: %s", preview(frame))
        return None
    if not isinstance(data, dict):
        logger.debug("Dropping frame that is not a JSON object")
        return None
    if data.get("type") != MESSAGE_TYPE:
        logger.debug("Ignoring frame of type %r", data.get("type"))
        return None

    content = data.get("content")
    if not isinstance(content, str):
        logger.debug("Dropping clipboard frame without text content")
        return None
    if not validate_content_size(content):
        logger.warning("Dropping clipboard frame exceeding 10 MB limit")
        return None
    source = data.get("source")
    if not isinstance(source, str):
        source = UNKNOWN_SOURCE
    return SyncMessage(content=content, source=source)


def preview(content: str) -> str:
    """
    Shorten content for log output.

    Args:
        content: Text to shorten.

    Returns:
        The first PREVIEW_LENGTH characters, followed by "..." if cut.
    """
    if len(content) <= PREVIEW_LENGTH:
        return content
    return content[:PREVIEW_LENGTH] + "..."
