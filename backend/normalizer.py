import re

# Matches: ICS 111, ICS-111, ICS111, MATH 241L, Busn 120, HwSt 107
CANONICAL = re.compile(r'^([A-Za-z]{1,6})\s*[-]?\s*(\d{2,4}[A-Za-z]?)$')
_LEADING_DIGITS = re.compile(r'^\s*(\d+)')


def format_course_code(prefix: str, number) -> str:
    return f"{str(prefix).strip()} {str(number).strip()}"


def parse_course_code(raw: str) -> tuple[str, str] | None:
    """
    Splits a course code into (prefix, number), keeping the prefix's case
    since some campuses publish mixed-case prefixes ('Busn', 'HwSt').
    Returns None if the string cannot be parsed as a course code.
    """
    if not raw or not str(raw).strip():
        return None
    m = CANONICAL.match(str(raw).strip())
    if not m:
        return None
    return m.group(1), m.group(2).upper()


def course_number_value(number) -> int | None:
    """Leading integer of a course number: '111' -> 111, '499V' -> 499, 'TBA' -> None."""
    if number is None:
        return None
    m = _LEADING_DIGITS.match(str(number))
    if not m:
        return None
    return int(m.group(1))


def course_level(number) -> int | None:
    """
    Hundreds level of a course number (100, 200, 300, 400).
    Numbers outside 100-499 have no quota level and return None.
    """
    value = course_number_value(number)
    if value is None or not (100 <= value <= 499):
        return None
    return (value // 100) * 100
