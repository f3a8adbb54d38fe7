from __future__ import annotations

import math
import re

from writing_compass.schemas.report import DraftStatistics, Statistics

_LINE_BREAK_RE = re.compile(r"[\r\n]")
# 마침표/느낌표/물음표로 끝나는 문장, 닫는 따옴표와 공백까지 포함
_SENTENCE_RE = re.compile(r"[^.!?]*[.!?]+[\"'”’」』)]?\s*")
_PUNCT_ONLY_RE = re.compile(r"^[\s.!?\"'”’「」『』()]*$")


def split_sentences(text: str) -> list[str]:
    """Split text into sentences ending with ``.``, ``!`` or ``?``.

    A trailing fragment without terminal punctuation is not a sentence.
    Matches that are only punctuation after trimming are dropped.
    """
    if not text:
        return []
    return [
        s.strip()
        for s in _SENTENCE_RE.findall(text)
        if not _PUNCT_ONLY_RE.match(s)
    ]


def count_chars(text: str) -> int:
    """Character count with all line-break characters removed."""
    return len(_LINE_BREAK_RE.sub("", text or ""))


def count_paragraphs(text: str, *, minimum: int = 1) -> int:
    """Count non-blank lines; a text without any line break is one paragraph.

    ``minimum=0`` gives the live draft count, where blank input shows 0.
    """
    text = text or ""
    if "\n" not in text:
        count = 1 if text.strip() else 0
    else:
        count = sum(1 for line in text.split("\n") if line.strip())
    return max(minimum, count)


def js_round(value: float) -> int:
    """Round half away from zero for non-negative values (like ``Math.round``)."""
    return math.floor(value + 0.5)


def compute_statistics(text: str) -> Statistics:
    """Derive writing statistics from the raw essay text."""
    char_count = count_chars(text)
    sentence_count = len(split_sentences(text))
    avg = js_round(char_count / sentence_count) if sentence_count else 0
    return Statistics(
        char_count=char_count,
        sentence_count=sentence_count,
        paragraph_count=count_paragraphs(text),
        avg_sentence_length=avg,
    )


def compute_draft_statistics(text: str) -> DraftStatistics:
    """Counts shown while typing, before the essay is submitted."""
    return DraftStatistics(
        char_count=count_chars(text),
        paragraph_count=count_paragraphs(text, minimum=0),
    )
