"""Generated-text cleanup helpers.

Shared helpers for stripping reasoning tags and extracting JSON from replies.
"""

import re

_THINK_PAIR_RE = re.compile(r"<think>.*?</think>", re.DOTALL)
_THINK_OPEN_RE = re.compile(r"<think>.*", re.DOTALL)
_THINK_CLOSE_RE = re.compile(r"^.*?</think>", re.DOTALL)


def strip_think_tags(text: str) -> str:
    """Remove <think>...</think> tags from generated output."""
    text = _THINK_PAIR_RE.sub("", text)
    text = _THINK_OPEN_RE.sub("", text)
    text = _THINK_CLOSE_RE.sub("", text)
    return text


def strip_code_fences(text: str) -> str:
    """Drop markdown code fences some models wrap their whole reply in."""
    return re.sub(r"```[a-zA-Z]*", "", text).strip()


def extract_json_object(text: str) -> str:
    """Extract a JSON object from generated output, stripping think tags and markdown fences."""
    text = strip_code_fences(strip_think_tags(text))
    idx = text.find("{")
    if idx > 0:
        text = text[idx:]
    last = text.rfind("}")
    if last >= 0:
        text = text[: last + 1]
    return text.strip()
