"""Markup and entity cleanup for provider text."""

import re

ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#039;": "'",
    "&#39;": "'",
    "&#x27;": "'",
    "&nbsp;": " ",
}

_NUMERIC_ENTITY = re.compile(r"&#(\d+);")
_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")


def decode_entities(text: str) -> str:
    """Decode the fixed entity table plus decimal character references."""
    for entity, char in ENTITIES.items():
        text = text.replace(entity, char)

    def _char(match: "re.Match[str]") -> str:
        code = int(match.group(1))
        try:
            return chr(code)
        except (ValueError, OverflowError):
            return match.group(0)

    return _NUMERIC_ENTITY.sub(_char, text)


def strip_markup(text: str) -> str:
    """Remove tags and collapse whitespace."""
    return _WHITESPACE.sub(" ", _TAG.sub(" ", text)).strip()


def make_snippet(text: str, max_length: int = 300) -> str:
    """Plain-text snippet capped at ``max_length`` characters."""
    return strip_markup(decode_entities(text))[:max_length].strip()
