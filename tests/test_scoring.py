import math

import pytest

from writing_compass.schemas.report import CategoryAssessment, TitleAssessment
from writing_compass.services.categories import (
    TITLE_WEIGHT,
    category_names,
    get_categories,
)
from writing_compass.services.scoring import (
    GRADE_POINTS,
    GRADES,
    calculate_score,
    grade_to_point,
    normalize_grade,
    validate_assessments,
    validate_title,
)


def _categories(*grades: str) -> dict[str, CategoryAssessment]:
    return {
        name: CategoryAssessment(grade=grade)
        for name, grade in zip(category_names(), grades)
    }


class TestCategoryTable:
    def test_fixed_order_and_weights(self):
        assert {c.name: c.weight for c in get_categories()} == {
            "논리성": 0.30,
            "구조성": 0.25,
            "표현성": 0.20,
            "완성도": 0.15,
        }
        assert TITLE_WEIGHT == 0.10

    def test_weights_sum_to_one(self):
        total = sum(c.weight for c in get_categories()) + TITLE_WEIGHT
        assert math.isclose(total, 1.0)


class TestGradeToPoint:
    @pytest.mark.parametrize(
        "grade,points",
        [
            ("A+", 100),
            ("A", 90),
            ("B+", 80),
            ("B", 70),
            ("C+", 60),
            ("C", 50),
            ("D+", 40),
            ("D", 35),
            ("F", 30),
        ],
    )
    def test_table(self, grade: str, points: int):
        assert grade_to_point(grade) == points

    @pytest.mark.parametrize("grade", ["", "E", "a", "A++", "우수"])
    def test_unknown_grade_counts_as_f(self, grade: str):
        assert grade_to_point(grade) == 30

    def test_points_are_monotonic_in_rank(self):
        points = [GRADE_POINTS[g] for g in GRADES]
        assert points == sorted(points, reverse=True)


class TestNormalizeGrade:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("A+", "A+"),
            (" b ", "B"),
            ("c＋", "C+"),
            ("B +", "B+"),
            ("A+등급", "A+"),
            ("D-", "D"),
            ("E", "F"),
            ("우수", "F"),
            ("", "F"),
            (None, "F"),
        ],
    )
    def test_normalize(self, raw, expected: str):
        assert normalize_grade(raw) == expected

    def test_custom_default(self):
        assert normalize_grade("??", default="C") == "C"


class TestValidateAssessments:
    def test_outputs_only_enumerated_grades(self):
        raw = _categories("a+", "Z", "B +", "")
        validated = validate_assessments(raw, paragraph_count=3)
        assert [a.grade for a in validated.values()] == ["A+", "F", "B+", "F"]
        assert all(a.grade in GRADES for a in validated.values())

    def test_missing_category_gets_defaults(self):
        validated = validate_assessments({"논리성": CategoryAssessment(grade="A")}, 1)
        assert list(validated) == category_names()
        assert validated["구조성"] == CategoryAssessment()

    def test_does_not_mutate_input(self):
        raw = _categories("b", "B", "B", "B")
        validate_assessments(raw, 2)
        assert raw["논리성"].grade == "b"

    def test_keeps_text_fields(self):
        raw = {"논리성": CategoryAssessment(grade="a", evaluation="좋아요")}
        assert validate_assessments(raw, 1)["논리성"].evaluation == "좋아요"


class TestValidateTitle:
    def test_invalid_title_grade_defaults_to_c(self):
        title = TitleAssessment(current="t", grade="???")
        assert validate_title(title).grade == "C"

    def test_valid_title_is_returned_unchanged(self):
        title = TitleAssessment(current="t", grade="A")
        assert validate_title(title) is title


class TestCalculateScore:
    def test_all_b_with_default_title(self):
        score = calculate_score(_categories("B", "B", "B", "B"), "C")
        assert score == math.ceil(70 * 0.30 + 70 * 0.25 + 70 * 0.20 + 70 * 0.15 + 50 * 0.10)

    def test_bounds(self):
        assert calculate_score(_categories("A+", "A+", "A+", "A+"), "A+") == 100
        assert calculate_score(_categories("F", "F", "F", "F"), "F") == 30

    def test_rounds_up(self):
        # 90*.3 + 35*.25 + 50*.2 + 50*.15 + 50*.1 = 58.25
        assert calculate_score(_categories("A", "D", "C", "C"), "C") == 59

    def test_absent_title_contributes_nothing(self):
        with_title = calculate_score(_categories("B", "B", "B", "B"), "F")
        without_title = calculate_score(_categories("B", "B", "B", "B"), None)
        assert with_title - without_title == 3

    @pytest.mark.parametrize("position", range(4))
    def test_non_decreasing_when_one_grade_improves(self, position: int):
        previous = None
        for grade in reversed(GRADES):
            grades = ["C"] * 4
            grades[position] = grade
            score = calculate_score(_categories(*grades), "C")
            assert 30 <= score <= 100
            if previous is not None:
                assert score >= previous
            previous = score

    def test_title_improvement_is_non_decreasing(self):
        scores = [calculate_score(_categories("B", "B", "B", "B"), g) for g in reversed(GRADES)]
        assert scores == sorted(scores)
