"""
Strict parsing of model output into the plan wire format.

Nothing is repaired here: a response that is not JSON, or whose shape
differs from the plan schema, raises GenerationParseError.
"""

import json

from errors import GenerationParseError
from prompt_builder import SEMESTER_NAMES


def _strip_fences(raw: str) -> str:
    raw = (raw or "").strip()
    # Strip markdown code fences if the model wraps the JSON
    if raw.startswith("```"):
        lines = raw.splitlines()
        raw = "\n".join(lines[1:-1] if lines[-1].strip() == "```" else lines[1:])
    return raw.strip()


def extract_json_object(raw: str) -> str:
    """Outermost {...} span of the text, ignoring any prose around it."""
    text = _strip_fences(raw)
    if text.startswith("["):
        raise GenerationParseError("Model returned a JSON array; expected a single plan object.")
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise GenerationParseError("No JSON object found in model response.")
    return text[start:end + 1]


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise GenerationParseError(message)


def _parse_course(raw, where: str) -> dict:
    _require(isinstance(raw, dict), f"{where}: course must be an object.")
    name = raw.get("name")
    credits = raw.get("credits")
    _require(isinstance(name, str) and name.strip() != "", f"{where}: course name must be a non-empty string.")
    _require(_is_number(credits) and credits >= 0, f"{where}: course credits must be a non-negative number.")
    return {"name": name.strip(), "credits": credits}


def _parse_semester(raw, where: str) -> dict:
    _require(isinstance(raw, dict), f"{where}: semester must be an object.")
    name = raw.get("semester_name")
    _require(name in SEMESTER_NAMES, f"{where}: semester_name must be one of {', '.join(SEMESTER_NAMES)}.")
    credits = raw.get("credits")
    _require(_is_number(credits), f"{where}: semester credits must be a number.")
    courses = raw.get("courses")
    _require(isinstance(courses, list), f"{where}: courses must be an array.")
    return {
        "semester_name": name,
        "credits": credits,
        "courses": [_parse_course(c, f"{where} course {i + 1}") for i, c in enumerate(courses)],
    }


def _parse_year(raw, expected_number: int) -> dict:
    where = f"year {expected_number}"
    _require(isinstance(raw, dict), f"{where}: year must be an object.")
    number = raw.get("year_number")
    _require(
        _is_number(number) and float(number) == expected_number,
        f"{where}: year_number must be {expected_number} (years are numbered sequentially from 1).",
    )
    semesters = raw.get("semesters")
    _require(isinstance(semesters, list), f"{where}: semesters must be an array.")
    return {
        "year_number": expected_number,
        "semesters": [_parse_semester(s, f"{where} semester {i + 1}") for i, s in enumerate(semesters)],
    }


def parse_plan(raw_text: str) -> dict:
    """Parse and shape-check a plan. Unknown keys are dropped."""
    try:
        data = json.loads(extract_json_object(raw_text))
    except json.JSONDecodeError as exc:
        raise GenerationParseError(f"Model response is not valid JSON: {exc.msg}") from exc

    _require(isinstance(data, dict), "Plan must be a JSON object.")
    _require(isinstance(data.get("program_name"), str), "program_name must be a string.")
    _require(isinstance(data.get("institution"), str), "institution must be a string.")
    _require(_is_number(data.get("total_credits")), "total_credits must be a number.")
    years = data.get("years")
    _require(isinstance(years, list) and len(years) > 0, "years must be a non-empty array.")

    return {
        "program_name": data["program_name"],
        "institution": data["institution"],
        "total_credits": data["total_credits"],
        "years": [_parse_year(y, i + 1) for i, y in enumerate(years)],
    }
