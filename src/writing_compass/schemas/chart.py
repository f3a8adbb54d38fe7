from pydantic import Field

from writing_compass.schemas.base import CamelModel


class ChartPoint(CamelModel):
    x: float
    y: float


class ChartAxis(CamelModel):
    """Line from the chart center to the full-radius point of one category."""

    name: str
    angle: float  # degrees
    start: ChartPoint
    end: ChartPoint


class ChartLabel(CamelModel):
    name: str
    grade: str
    anchor: ChartPoint


class ChartRing(CamelModel):
    value: float
    radius: float
    path: str


class RadarChart(CamelModel):
    center: float
    radius: float
    vertices: list[ChartPoint] = Field(default_factory=list)
    path: str = ""
    axes: list[ChartAxis] = Field(default_factory=list)
    labels: list[ChartLabel] = Field(default_factory=list)
    rings: list[ChartRing] = Field(default_factory=list)
