"""Plain-text format: the content is returned as read."""
from __future__ import annotations


def parse_text(text: str) -> str:
    return text
