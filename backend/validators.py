"""
Deterministic verification of a generated plan.
No Flask, OpenAI or data-loader imports.

Every course entry is classified as a curated MajorCourse, a Placeholder, or
Unknown. Unknown entries are rewritten to "Elective" with their credits kept,
so a repaired plan only ever holds the first two kinds. Credit totals are
recomputed from the course entries; the model's own totals are ignored.
"""

import copy
import sys
from dataclasses import dataclass

from normalizer import parse_course_code
from prompt_builder import PLACEHOLDER_LABELS

ELECTIVE = "Elective"
OVER_TARGET_RATIO = 1.10


@dataclass(frozen=True)
class MajorCourse:
    code: str


@dataclass(frozen=True)
class Placeholder:
    kind: str


@dataclass(frozen=True)
class Unknown:
    raw_name: str


def strip_title_suffix(name: str) -> str:
    """'ICS 111 - Introduction to Computer Science I' -> 'ICS 111'"""
    return str(name or "").split(" - ", 1)[0].strip()


def placeholder_kind(name: str) -> str | None:
    # "Thesis/Capstone" is checked before "Capstone" so it keeps its own kind.
    for label in PLACEHOLDER_LABELS:
        if label in name:
            return label
    return None


def classify_entry(name: str, curated_codes: set[str]) -> MajorCourse | Placeholder | Unknown:
    code = strip_title_suffix(name)
    if code in curated_codes:
        return MajorCourse(code)
    kind = placeholder_kind(str(name or ""))
    if kind is not None:
        return Placeholder(kind)
    return Unknown(str(name or ""))


def _sum_credits(courses) -> float:
    return sum(c["credits"] for c in courses)


def _credit_status(total, required_credits, over_target_ratio: float) -> tuple[str, float | None]:
    if not required_credits:
        return "unknown", None
    ratio = total / required_credits
    if ratio < 1.0:
        return "under_target", ratio
    if ratio > over_target_ratio:
        return "over_target", ratio
    return "ok", ratio


def validate_and_repair_plan(
    plan: dict,
    curated_codes,
    required_credits=None,
    expected_years: int | None = None,
    over_target_ratio: float = OVER_TARGET_RATIO,
    log: bool = True,
) -> tuple[dict, dict]:
    """
    Returns (repaired_plan, report). The input plan is not modified.

    report:
      {
        "major_count": 10, "major_credits": 30,
        "placeholder_count": 30, "placeholder_credits": 90,
        "placeholder_ratio": 0.75,          # placeholder credits / total credits
        "placeholder_kinds": {"Elective": 4, ...},
        "discarded": [{"year_number": 2, "semester_name": "fall_semester",
                       "original_name": "MATH 999", "credits": 3}],
        "total_credits": 120, "reported_total_credits": 118,
        "required_credits": 120, "credit_ratio": 1.0, "credit_status": "ok",
        "warnings": ["..."]
      }
    """
    curated_codes = set(curated_codes)
    repaired = copy.deepcopy(plan)

    major_count = 0
    major_credits = 0
    placeholder_count = 0
    placeholder_credits = 0
    placeholder_kinds: dict[str, int] = {}
    discarded: list[dict] = []

    for year in repaired.get("years", []):
        for semester in year.get("semesters", []):
            for course in semester.get("courses", []):
                result = classify_entry(course["name"], curated_codes)
                if isinstance(result, Unknown):
                    discarded.append({
                        "year_number": year.get("year_number"),
                        "semester_name": semester.get("semester_name"),
                        "original_name": result.raw_name,
                        "credits": course["credits"],
                        "looks_like_code": parse_course_code(strip_title_suffix(result.raw_name)) is not None,
                    })
                    course["name"] = ELECTIVE
                    result = Placeholder(ELECTIVE)

                if isinstance(result, MajorCourse):
                    course["name"] = result.code
                    major_count += 1
                    major_credits += course["credits"]
                else:
                    placeholder_count += 1
                    placeholder_credits += course["credits"]
                    placeholder_kinds[result.kind] = placeholder_kinds.get(result.kind, 0) + 1

            semester["credits"] = _sum_credits(semester.get("courses", []))

    total = sum(
        _sum_credits(semester.get("courses", []))
        for year in repaired.get("years", [])
        for semester in year.get("semesters", [])
    )
    reported_total = plan.get("total_credits")
    repaired["total_credits"] = total

    status, ratio = _credit_status(total, required_credits, over_target_ratio)
    warnings: list[str] = []
    if discarded:
        warnings.append(
            f"Replaced {len(discarded)} unrecognized course(s) with '{ELECTIVE}': "
            f"{', '.join(d['original_name'] for d in discarded)}"
        )
    if status == "under_target":
        warnings.append(f"Plan totals {total} credits, below the required {required_credits}.")
    elif status == "over_target":
        warnings.append(
            f"Plan totals {total} credits, more than {int(round((over_target_ratio - 1) * 100))}% "
            f"over the required {required_credits}."
        )
    if reported_total is not None and reported_total != total:
        warnings.append(f"Model reported {reported_total} total credits; recomputed {total}.")
    year_count = len(repaired.get("years", []))
    if expected_years and year_count != expected_years:
        warnings.append(f"Plan spans {year_count} year(s); program length is {expected_years}.")

    report = {
        "major_count": major_count,
        "major_credits": major_credits,
        "placeholder_count": placeholder_count,
        "placeholder_credits": placeholder_credits,
        "placeholder_ratio": (placeholder_credits / total) if total else 0.0,
        "placeholder_kinds": placeholder_kinds,
        "discarded": discarded,
        "total_credits": total,
        "reported_total_credits": reported_total,
        "required_credits": required_credits,
        "credit_ratio": ratio,
        "credit_status": status,
        "warnings": warnings,
    }
    if log:
        log_plan_diagnostics(report)
    return repaired, report


def log_plan_diagnostics(report: dict) -> None:
    print(
        f"[INFO] Plan entries: {report['major_count']} major ({report['major_credits']} cr), "
        f"{report['placeholder_count']} placeholder ({report['placeholder_credits']} cr), "
        f"placeholder ratio {report['placeholder_ratio']:.2f}"
    )
    print(
        f"[INFO] Plan credits: {report['total_credits']} of {report['required_credits']} required "
        f"({report['credit_status']})"
    )
    for warning in report["warnings"]:
        print(f"[WARN] {warning}", file=sys.stderr)
