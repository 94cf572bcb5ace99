"""
Bounded, level-balanced course selection for the plan generator.

The model only sees what this module returns, so the list has to be small
enough to fit in a prompt while still covering every level a program of the
given length needs.
"""

import math

from config import CurationConfig
from normalizer import course_level, course_number_value

LEVELS = (100, 200, 300, 400)

_DEFAULT_CONFIG = CurationConfig()


def target_course_count(required_credits, config: CurationConfig | None = None) -> int:
    """min(max_courses, ceil(ceil(credits / 3) * multiplier))"""
    config = config or _DEFAULT_CONFIG
    credits = max(0, float(required_credits or 0))
    course_slots = math.ceil(credits / config.credits_per_course)
    return min(config.max_courses, math.ceil(course_slots * config.multiplier))


def level_quotas(target: int, duration_years, config: CurationConfig | None = None) -> dict[int, int]:
    """
    Per-level course quotas. Short programs draw only from 100/200; longer
    ones spread over all four levels. Every share is floored and the last
    level takes whatever is left so the quotas always sum to target.
    """
    config = config or _DEFAULT_CONFIG
    if duration_years <= config.short_program_years:
        levels = (100, 200)
        shares = config.short_shares
    else:
        levels = LEVELS
        shares = config.long_shares

    quotas: dict[int, int] = {level: 0 for level in LEVELS}
    assigned = 0
    for level, share in zip(levels[:-1], shares):
        quotas[level] = int(math.floor(target * share + 1e-9))
        assigned += quotas[level]
    quotas[levels[-1]] = max(0, target - assigned)
    return quotas


def _course_sort_key(course: dict):
    number = str(course.get("number", "") or "")
    value = course_number_value(number)
    return (value if value is not None else 10**6, number, str(course.get("prefix", "")))


def bucket_by_level(courses: list[dict]) -> dict[int, list[dict]]:
    """Group courses by hundreds level; courses outside 100-499 are dropped."""
    buckets: dict[int, list[dict]] = {level: [] for level in LEVELS}
    for course in courses:
        level = course_level(course.get("number"))
        if level is None:
            continue
        buckets[level].append(course)
    for level in LEVELS:
        buckets[level].sort(key=_course_sort_key)
    return buckets


def curate_courses(
    courses: list[dict],
    required_credits,
    duration_years,
    config: CurationConfig | None = None,
) -> list[dict]:
    config = config or _DEFAULT_CONFIG
    target = target_course_count(required_credits, config)
    if len(courses) <= target:
        return list(courses)

    buckets = bucket_by_level(courses)
    quotas = level_quotas(target, duration_years, config)

    curated: list[dict] = []
    for level in LEVELS:
        curated.extend(buckets[level][:quotas[level]])
    return curated


def summarize_levels(courses: list[dict]) -> dict[str, int]:
    """Count of courses per level label, for logs and diagnostics."""
    counts = {str(level): 0 for level in LEVELS}
    counts["other"] = 0
    for course in courses:
        level = course_level(course.get("number"))
        counts[str(level) if level is not None else "other"] += 1
    return counts
