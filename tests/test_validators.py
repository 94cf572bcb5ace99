import copy

import pytest

from prompt_builder import PLACEHOLDER_LABELS
from validators import (
    MajorCourse,
    Placeholder,
    Unknown,
    classify_entry,
    strip_title_suffix,
    validate_and_repair_plan,
)

CURATED = {"ICS 111", "ICS 211", "ICS 311", "MATH 241"}


def _plan(courses_by_semester, total_credits=999):
    """courses_by_semester: list of years, each a list of semesters, each a list of (name, credits)."""
    names = ["fall_semester", "spring_semester", "summer_semester"]
    return {
        "program_name": "Computer Science",
        "institution": "UH Manoa",
        "total_credits": total_credits,
        "years": [
            {
                "year_number": y + 1,
                "semesters": [
                    {
                        "semester_name": names[s],
                        "credits": 0,
                        "courses": [{"name": n, "credits": c} for n, c in sem],
                    }
                    for s, sem in enumerate(year)
                ],
            }
            for y, year in enumerate(courses_by_semester)
        ],
    }


def _all_courses(plan):
    return [
        course
        for year in plan["years"]
        for semester in year["semesters"]
        for course in semester["courses"]
    ]


class TestClassifyEntry:
    def test_major_course(self):
        assert classify_entry("ICS 111", CURATED) == MajorCourse("ICS 111")

    def test_major_course_with_title_suffix(self):
        assert classify_entry("ICS 211 - Introduction to Computer Science II", CURATED) == MajorCourse("ICS 211")

    @pytest.mark.parametrize("name,kind", [
        ("Gen Ed Requirement", "Gen Ed Requirement"),
        ("Gen Ed Requirement (DH)", "Gen Ed Requirement"),
        ("Support Course", "Support Course"),
        ("ICS 300+ Elective", "Elective"),
        ("Thesis/Capstone", "Thesis/Capstone"),
        ("Senior Capstone", "Capstone"),
    ])
    def test_placeholders(self, name, kind):
        assert classify_entry(name, CURATED) == Placeholder(kind)

    def test_placeholder_match_is_case_sensitive(self):
        assert classify_entry("free elective", CURATED) == Unknown("free elective")

    def test_hallucinated_code(self):
        assert classify_entry("MATH 999", CURATED) == Unknown("MATH 999")

    def test_code_not_in_curated_list(self):
        assert isinstance(classify_entry("ICS 699", CURATED), Unknown)

    def test_strip_title_suffix(self):
        assert strip_title_suffix("ICS 111 - Intro - Part I") == "ICS 111"
        assert strip_title_suffix("ICS 111") == "ICS 111"


class TestValidateAndRepair:
    def test_hallucinated_entry_becomes_elective(self):
        plan = _plan([[[("ICS 111", 4), ("MATH 999", 3)]]])
        repaired, report = validate_and_repair_plan(plan, CURATED, required_credits=7, log=False)
        courses = _all_courses(repaired)
        assert courses[1] == {"name": "Elective", "credits": 3}
        assert report["discarded"][0]["original_name"] == "MATH 999"
        assert report["discarded"][0]["credits"] == 3
        assert report["discarded"][0]["looks_like_code"] is True

    def test_major_course_name_normalized_to_code(self):
        plan = _plan([[[("ICS 111 - Introduction to Computer Science I", 4)]]])
        repaired, _ = validate_and_repair_plan(plan, CURATED, log=False)
        assert _all_courses(repaired)[0]["name"] == "ICS 111"

    def test_placeholder_name_unchanged(self):
        plan = _plan([[[("Gen Ed Requirement (FW)", 3)]]])
        repaired, _ = validate_and_repair_plan(plan, CURATED, log=False)
        assert _all_courses(repaired)[0]["name"] == "Gen Ed Requirement (FW)"

    def test_total_credits_recomputed(self):
        plan = _plan(
            [
                [[("ICS 111", 4), ("Gen Ed Requirement", 3)], [("ICS 211", 4)]],
                [[("Made Up Course", 3)], [("ICS 311", 4), ("Elective", 3)]],
            ],
            total_credits=120,
        )
        repaired, report = validate_and_repair_plan(plan, CURATED, log=False)
        assert repaired["total_credits"] == 21
        assert report["reported_total_credits"] == 120
        assert [s["credits"] for y in repaired["years"] for s in y["semesters"]] == [7, 4, 3, 7]

    def test_every_entry_is_curated_or_placeholder(self):
        plan = _plan([[[("ICS 111", 4), ("ics 211", 4), ("Basket Weaving", 3), ("Capstone", 3), ("DATA 200", 3)]]])
        repaired, _ = validate_and_repair_plan(plan, CURATED, log=False)
        for course in _all_courses(repaired):
            assert course["name"] in CURATED or any(label in course["name"] for label in PLACEHOLDER_LABELS)

    def test_input_not_mutated(self):
        plan = _plan([[[("MATH 999", 3)]]])
        snapshot = copy.deepcopy(plan)
        validate_and_repair_plan(plan, CURATED, log=False)
        assert plan == snapshot

    def test_counts_and_ratio(self):
        plan = _plan([[[("ICS 111", 4), ("MATH 241", 4), ("Gen Ed Requirement", 3), ("Nonsense", 1)]]])
        _, report = validate_and_repair_plan(plan, CURATED, log=False)
        assert report["major_count"] == 2
        assert report["major_credits"] == 8
        assert report["placeholder_count"] == 2
        assert report["placeholder_credits"] == 4
        assert report["placeholder_kinds"] == {"Gen Ed Requirement": 1, "Elective": 1}
        assert report["placeholder_ratio"] == pytest.approx(4 / 12)

    @pytest.mark.parametrize("credits,required,status", [
        (110, 120, "under_target"),
        (120, 120, "ok"),
        (132, 120, "ok"),
        (133, 120, "over_target"),
    ])
    def test_credit_status(self, credits, required, status):
        plan = _plan([[[("Elective", credits)]]])
        _, report = validate_and_repair_plan(plan, CURATED, required_credits=required, log=False)
        assert report["credit_status"] == status

    def test_credit_status_unknown_without_requirement(self):
        _, report = validate_and_repair_plan(_plan([[[("ICS 111", 4)]]]), CURATED, log=False)
        assert report["credit_status"] == "unknown"
        assert report["credit_ratio"] is None

    def test_year_count_warning(self):
        plan = _plan([[[("ICS 111", 4)]]])
        _, report = validate_and_repair_plan(plan, CURATED, expected_years=4, log=False)
        assert any("1 year(s)" in w for w in report["warnings"])

    def test_diagnostics_logged(self, capsys):
        plan = _plan([[[("MATH 999", 3)]]])
        validate_and_repair_plan(plan, CURATED, required_credits=120)
        out = capsys.readouterr()
        assert "[INFO] Plan entries" in out.out
        assert "MATH 999" in out.err
        assert "below the required 120" in out.err
