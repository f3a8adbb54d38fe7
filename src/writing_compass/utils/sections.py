"""Report section grammar.

Locates spans of loosely formatted report text by marker:

- heading sections: a line beginning ``# <name>`` (any number of ``#``)
- tagged blocks: ``[<name>]``, optionally wrapped in ``**bold**``
- labeled fields inside a span: ``<label>: value`` at a line start

Every span ends at the next marker of any kind (a line starting with ``#`` or
with a ``[...]`` tag) or at the end of the text. Lookups never raise; a missing
marker yields an empty string.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

# 다음 섹션 시작(제목 줄 또는 줄 머리의 [태그]) 또는 텍스트 끝
_NEXT_MARKER = r"(?=\n[ \t]*(?:#|(?:\*\*)?\[[^\[\]\n]+\])|\Z)"

# 라벨 앞의 목록 기호와 굵게 표시
_LABEL_PREFIX = r"[ \t]*(?:[-*•][ \t]*)?(?:\*\*)?"
_LABEL_SUFFIX = r"(?:\*\*)?[ \t]*[:：](?:\*\*)?"

_NUMBERED_TAG_RE = r"\[(\d+)[ \t]*{suffix}\]"


def extract_heading_section(text: str, heading: str) -> str:
    """Return the body under ``# <heading>`` up to the next marker."""
    if not text:
        return ""
    pattern = re.compile(
        rf"^[ \t]*#+[ \t]*{re.escape(heading)}[^\n]*(.*?){_NEXT_MARKER}",
        re.MULTILINE | re.DOTALL,
    )
    match = pattern.search(text)
    return match.group(1).strip() if match else ""


def extract_tagged_block(text: str, tag: str) -> str:
    """Return the body following ``[<tag>]`` up to the next marker."""
    if not text:
        return ""
    pattern = re.compile(rf"\[{re.escape(tag)}\](.*?){_NEXT_MARKER}", re.DOTALL)
    match = pattern.search(text)
    return match.group(1).strip() if match else ""


def iter_numbered_blocks(text: str, suffix: str) -> Iterator[tuple[int, str]]:
    """Yield ``(N, body)`` for every ``[<N><suffix>]`` block in order of appearance."""
    if not text:
        return
    tag = _NUMBERED_TAG_RE.format(suffix=re.escape(suffix))
    pattern = re.compile(rf"{tag}(.*?){_NEXT_MARKER}", re.DOTALL)
    for match in pattern.finditer(text):
        yield int(match.group(1)), match.group(2).strip()


def extract_field(section: str, label: str, labels: Iterable[str]) -> str:
    """Return the value of ``label:`` inside *section*.

    The value runs until the next line that starts with any of *labels*
    followed by a colon, or until the end of the section.
    """
    if not section:
        return ""
    stop = "|".join(re.escape(lb) for lb in sorted(labels, key=len, reverse=True))
    pattern = re.compile(
        rf"(?:^|\n){_LABEL_PREFIX}{re.escape(label)}{_LABEL_SUFFIX}[ \t]*"
        rf"(.*?)(?=\n{_LABEL_PREFIX}(?:{stop}){_LABEL_SUFFIX}|\Z)",
        re.DOTALL,
    )
    match = pattern.search(section)
    return match.group(1).strip() if match else ""


def extract_line_field(text: str, label: str) -> str:
    """Return the rest of the first line that starts with ``label:``."""
    if not text:
        return ""
    pattern = re.compile(
        rf"(?:^|\n){_LABEL_PREFIX}{re.escape(label)}{_LABEL_SUFFIX}[ \t]*([^\n]*)"
    )
    match = pattern.search(text)
    return match.group(1).strip() if match else ""
