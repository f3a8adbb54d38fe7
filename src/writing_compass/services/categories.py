"""평가 영역 레지스트리

네 가지 고정 평가 영역(논리성/구조성/표현성/완성도)과 가중치를 데이터 테이블로 관리한다.
파서, 점수 계산, 프롬프트, 차트가 모두 이 테이블을 순서대로 순회하므로
영역을 추가하거나 가중치를 바꿀 때 분기 코드를 고칠 필요가 없다.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EvaluationCategory:
    """A single evaluation dimension with its composite-score weight."""

    name: str
    description: str
    weight: float


_BUILTIN_CATEGORIES: tuple[EvaluationCategory, ...] = (
    EvaluationCategory(
        name="논리성",
        description="주장과 근거가 분명하고, 생각의 흐름이 자연스럽게 이어지는가",
        weight=0.30,
    ),
    EvaluationCategory(
        name="구조성",
        description="처음-가운데-끝의 짜임과 문단 나누기가 알맞은가",
        weight=0.25,
    ),
    EvaluationCategory(
        name="표현성",
        description="낱말 선택과 문장 표현이 정확하고 생생한가",
        weight=0.20,
    ),
    EvaluationCategory(
        name="완성도",
        description="주제에 맞게 내용을 충분히 담아 글을 끝맺었는가",
        weight=0.15,
    ),
)

TITLE_WEIGHT = 0.10


def get_categories() -> tuple[EvaluationCategory, ...]:
    """Return the fixed evaluation categories in display and scoring order."""
    return _BUILTIN_CATEGORIES


def category_names() -> list[str]:
    return [c.name for c in _BUILTIN_CATEGORIES]
