"""레이더 차트 좌표 계산

영역별 등급을 정n각형 꼭짓점으로 옮긴다. 첫 축은 -90°(위쪽)에서 시작하고
360°/n 씩 증가한다. 화면 좌표계(y 가 아래로 증가)에서는 시계 방향으로 돈다.
마크업 생성은 표현 계층 몫이고 여기서는 좌표와 path 문자열만 만든다.
"""

import math

from writing_compass.schemas.chart import (
    ChartAxis,
    ChartLabel,
    ChartPoint,
    ChartRing,
    RadarChart,
)

GRADE_CHART_VALUES: dict[str, float] = {
    "A+": 1.0,
    "A": 0.9,
    "B+": 0.8,
    "B": 0.7,
    "C+": 0.6,
    "C": 0.5,
    "D+": 0.4,
    "D": 0.3,
    "F": 0.2,
}

START_ANGLE_DEG = -90.0
LABEL_OFFSET = 50.0
RING_VALUES: tuple[float, ...] = (0.2, 0.4, 0.6, 0.8, 1.0)


def grade_to_chart_value(grade: str) -> float:
    return GRADE_CHART_VALUES.get(grade, GRADE_CHART_VALUES["F"])


def axis_angles(n: int) -> list[float]:
    """Angles in degrees for *n* evenly spaced axes, first pointing up."""
    if n <= 0:
        return []
    step = 360.0 / n
    return [START_ANGLE_DEG + i * step for i in range(n)]


def polar_point(center: float, distance: float, angle_deg: float) -> ChartPoint:
    rad = math.radians(angle_deg)
    return ChartPoint(
        x=center + distance * math.cos(rad),
        y=center + distance * math.sin(rad),
    )


def closed_path(points: list[ChartPoint]) -> str:
    """``M x,y L ... L x0,y0``; the first vertex is repeated to close the shape."""
    if not points:
        return ""
    coords = [f"{p.x:.2f},{p.y:.2f}" for p in [*points, points[0]]]
    return "M " + " L ".join(coords)


def build_radar_chart(
    grades: list[tuple[str, str]],
    *,
    center: float = 200.0,
    radius: float = 120.0,
) -> RadarChart:
    """Build radar-chart geometry from ordered ``(category, grade)`` pairs."""
    angles = axis_angles(len(grades))
    center_point = ChartPoint(x=center, y=center)

    vertices: list[ChartPoint] = []
    axes: list[ChartAxis] = []
    labels: list[ChartLabel] = []
    for (name, grade), angle in zip(grades, angles):
        value = grade_to_chart_value(grade)
        vertices.append(polar_point(center, radius * value, angle))
        axes.append(
            ChartAxis(
                name=name,
                angle=angle,
                start=center_point,
                end=polar_point(center, radius, angle),
            )
        )
        labels.append(
            ChartLabel(
                name=name,
                grade=grade,
                anchor=polar_point(center, radius + LABEL_OFFSET, angle),
            )
        )

    rings = [
        ChartRing(
            value=value,
            radius=radius * value,
            path=closed_path([polar_point(center, radius * value, a) for a in angles]),
        )
        for value in RING_VALUES
    ]

    return RadarChart(
        center=center,
        radius=radius,
        vertices=vertices,
        path=closed_path(vertices),
        axes=axes,
        labels=labels,
        rings=rings,
    )
