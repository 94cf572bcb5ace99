"""
Environment-driven settings for the roadmap backend.

Every knob has a default so the backend runs with an empty environment.
Values that fail to parse fall back to their default instead of raising.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

BACKEND_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(BACKEND_DIR)
DEFAULT_DATA_PATH = os.path.join(PROJECT_ROOT, "data")


def env_float(name: str, default: float, minimum: float = 0.0) -> float:
    raw = os.environ.get(name, "")
    try:
        return max(minimum, float(raw))
    except (TypeError, ValueError):
        return default


def env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.environ.get(name, "")
    try:
        return max(minimum, int(raw))
    except (TypeError, ValueError):
        return default


def env_shares(name: str, default: tuple) -> tuple:
    """Parse a comma-separated list of fractions, e.g. '0.25,0.3,0.3'."""
    raw = os.environ.get(name, "")
    if not raw.strip():
        return default
    try:
        shares = tuple(float(part) for part in raw.split(",") if part.strip())
    except ValueError:
        return default
    if len(shares) != len(default) or any(s < 0 for s in shares) or sum(shares) > 1.0:
        return default
    return shares


def get_data_path() -> str:
    raw = os.environ.get("DATA_PATH")
    if not raw:
        return DEFAULT_DATA_PATH
    if not os.path.isabs(raw):
        return os.path.join(PROJECT_ROOT, raw)
    return raw


@dataclass(frozen=True)
class CurationConfig:
    # Heuristic defaults, not empirically tuned. Override through the environment.
    max_courses: int = 150
    multiplier: float = 1.8
    credits_per_course: int = 3
    short_program_years: int = 2
    # 100/200 shares for short programs; the 200 bucket takes the remainder.
    short_shares: tuple = (0.4, 0.6)
    # 100/200/300 shares for longer programs; the 400 bucket takes the remainder.
    long_shares: tuple = (0.25, 0.3, 0.3)
    max_prefixes: int = 15
    over_target_ratio: float = 1.10


@dataclass(frozen=True)
class LLMSettings:
    api_key: str = ""
    model: str = "gpt-4o-mini"
    temperature: float = 0.2
    max_tokens: int = 4000


def get_curation_config() -> CurationConfig:
    return CurationConfig(
        max_courses=env_int("CURATION_MAX_COURSES", 150),
        multiplier=env_float("CURATION_MULTIPLIER", 1.8, minimum=0.1),
        short_shares=env_shares("CURATION_SHORT_SHARES", (0.4, 0.6)),
        long_shares=env_shares("CURATION_LONG_SHARES", (0.25, 0.3, 0.3)),
        max_prefixes=env_int("MAX_PREFIXES", 15),
        over_target_ratio=env_float("CREDIT_OVER_TARGET_RATIO", 1.10, minimum=1.0),
    )


def get_llm_settings() -> LLMSettings:
    return LLMSettings(
        api_key=os.environ.get("OPENAI_API_KEY", ""),
        model=os.environ.get("OPENAI_MODEL", "gpt-4o-mini"),
        temperature=env_float("OPENAI_TEMPERATURE", 0.2),
        max_tokens=env_int("OPENAI_MAX_TOKENS", 4000, minimum=256),
    )
