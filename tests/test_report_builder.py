import math
from unittest.mock import patch

import pytest

from writing_compass.exceptions import EssayValidationError, ReportRenderError
from writing_compass.schemas.essay import EssayMetadata
from writing_compass.services.report_builder import build_report
from writing_compass.services.scoring import GRADES


def _all_b_report() -> str:
    blocks = "\n\n".join(
        f"[{name}]\n등급: B\n평가: 평가\n잘된 점: 장점\n개선점: 개선"
        for name in ("논리성", "구조성", "표현성", "완성도")
    )
    return f"# 영역별 평가\n{blocks}\n\n총평: 잘 썼어요\n"


class TestBuildReport:
    def test_end_to_end_all_b(self):
        essay = EssayMetadata(
            title="나의 하루",
            content="아침에 일어났다. 학교에 갔다.\n저녁에 숙제를 했다.",
        )
        report = build_report(_all_b_report(), essay)

        assert report.statistics.paragraph_count == 2
        assert [c.grade for c in report.categories.values()] == ["B"] * 4
        assert report.total_evaluation == "잘 썼어요"
        assert report.title.grade == "C"
        assert report.score == math.ceil(
            70 * 0.30 + 70 * 0.25 + 70 * 0.20 + 70 * 0.15 + 50 * 0.10
        )

    def test_sample_report(self, sample_report: str, essay: EssayMetadata):
        report = build_report(sample_report, essay)

        assert list(report.categories) == ["논리성", "구조성", "표현성", "완성도"]
        assert report.title.current == "봄 소풍"
        assert report.title.grade == "B+"
        assert [p.index for p in report.paragraphs] == [1, 2]
        assert report.structure.actions == "마지막에 느낀 점 문단을 더해요."
        assert report.score == math.ceil(
            90 * 0.30 + 70 * 0.25 + 60 * 0.20 + 70 * 0.15 + 80 * 0.10
        )
        assert [label.grade for label in report.chart.labels] == ["A", "B", "C+", "B"]

    def test_empty_report_text_is_total(self, essay: EssayMetadata):
        report = build_report("", essay)

        assert all(c.grade == "F" for c in report.categories.values())
        assert report.title.grade == "C"
        assert report.paragraphs == []
        assert report.total_evaluation == ""
        assert report.score == math.ceil(30 * 0.30 + 30 * 0.25 + 30 * 0.20 + 30 * 0.15 + 50 * 0.10)

    def test_malformed_grades_are_repaired(self, essay: EssayMetadata):
        text = "[논리성]\n등급: 매우 좋음\n[구조성]\n등급: b+\n# 제목 분석\n등급: ?"
        report = build_report(text, essay)

        assert report.categories["논리성"].grade == "F"
        assert report.categories["구조성"].grade == "B+"
        assert report.title.grade == "C"
        assert all(c.grade in GRADES for c in report.categories.values())

    def test_deterministic(self, sample_report: str, essay: EssayMetadata):
        assert build_report(sample_report, essay) == build_report(sample_report, essay)

    def test_camel_case_json(self, sample_report: str, essay: EssayMetadata):
        data = build_report(sample_report, essay).model_dump(by_alias=True)
        assert "totalEvaluation" in data
        assert "goodPoints" in data["categories"]["논리성"]
        assert "spellingCorrections" in data["paragraphs"][0]

    @pytest.mark.parametrize(
        "title,content",
        [("", "내용이 있다."), ("제목", ""), ("   ", "  \n ")],
    )
    def test_missing_required_fields_rejected(self, title: str, content: str):
        with pytest.raises(EssayValidationError):
            build_report("[논리성]\n등급: A", EssayMetadata(title=title, content=content))

    def test_unexpected_failure_becomes_generic_error(self, essay: EssayMetadata):
        with patch(
            "writing_compass.services.report_builder.build_radar_chart",
            side_effect=ZeroDivisionError("boom"),
        ):
            with pytest.raises(ReportRenderError) as exc_info:
                build_report("", essay)

        assert str(exc_info.value) == ReportRenderError.DEFAULT_MESSAGE
        assert "boom" not in str(exc_info.value)
