"""
Credential (degree/certificate) requirements.

Credit and duration norms come from the credential's level, optionally
overridden per program from credential_requirements.csv.
"""

import math
import os
import re

import pandas as pd

from errors import CatalogUnavailable

CREDENTIAL_CATALOG: dict[str, dict] = {
    "BA": {"name": "Bachelor of Arts", "level": "baccalaureate"},
    "BS": {"name": "Bachelor of Science", "level": "baccalaureate"},
    "BBA": {"name": "Bachelor of Business Administration", "level": "baccalaureate"},
    "BED": {"name": "Bachelor of Education", "level": "baccalaureate"},
    "BFA": {"name": "Bachelor of Fine Arts", "level": "baccalaureate"},
    "AA": {"name": "Associate in Arts", "level": "associate"},
    "AS": {"name": "Associate in Science", "level": "associate"},
    "AAS": {"name": "Associate in Applied Science", "level": "associate"},
    "MA": {"name": "Master of Arts", "level": "graduate"},
    "MS": {"name": "Master of Science", "level": "graduate"},
    "MBA": {"name": "Master of Business Administration", "level": "graduate"},
    "PhD": {"name": "Doctor of Philosophy", "level": "graduate"},
    "CA": {"name": "Certificate of Achievement", "level": "certificate"},
    "CO": {"name": "Certificate of Completion", "level": "certificate"},
    "UCert": {"name": "Undergraduate Certificate", "level": "certificate"},
}

LEVEL_DEFAULTS: dict[str, dict] = {
    "baccalaureate": {"required_credits": 120, "typical_duration_months": 48},
    "associate": {"required_credits": 60, "typical_duration_months": 24},
    "certificate": {"required_credits": 30, "typical_duration_months": 12},
    "graduate": {"required_credits": 36, "typical_duration_months": 24},
    "other": {"required_credits": 60, "typical_duration_months": 24},
}

UNDERGRADUATE_LEVELS = {"baccalaureate", "associate"}

_CODE_CLEAN_RE = re.compile(r"[\s.]+")
_CATALOG_BY_UPPER = {code.upper(): code for code in CREDENTIAL_CATALOG}


def normalize_credential_code(raw: str) -> str:
    """'B.S.' -> 'BS', 'phd' -> 'PhD'. Unknown codes are returned without dots/spaces."""
    cleaned = _CODE_CLEAN_RE.sub("", str(raw or ""))
    return _CATALOG_BY_UPPER.get(cleaned.upper(), cleaned)


def infer_credential_level(code: str) -> str:
    if code in CREDENTIAL_CATALOG:
        return CREDENTIAL_CATALOG[code]["level"]
    if "Cert" in code or "CERT" in code:
        return "certificate"
    if code.startswith("B"):
        return "baccalaureate"
    if code.startswith("A"):
        return "associate"
    if code.startswith("M") or code.startswith("D") or code.upper().startswith("PHD"):
        return "graduate"
    return "other"


def duration_years(months) -> int:
    try:
        months = float(months)
    except (TypeError, ValueError):
        return 1
    return max(1, math.ceil(months / 12))


def _program_key(program_title: str) -> str:
    return " ".join(str(program_title or "").lower().split())


class CredentialTable:
    def __init__(self, overrides: pd.DataFrame | None = None):
        self._overrides: dict[tuple[str, str], dict] = {}
        if overrides is not None and len(overrides) > 0:
            for _, row in overrides.iterrows():
                key = (_program_key(row.get("program_title")), normalize_credential_code(row.get("credential_code")))
                self._overrides[key] = {
                    "required_credits": pd.to_numeric(row.get("required_credits"), errors="coerce"),
                    "typical_duration_months": pd.to_numeric(row.get("typical_duration_months"), errors="coerce"),
                }

    @classmethod
    def from_csv(cls, path: str) -> "CredentialTable":
        if not os.path.isfile(path):
            return cls()
        return cls(pd.read_csv(path, dtype=str, keep_default_na=False))

    def requirements_for(self, program_title: str, credential_code: str) -> dict:
        code = normalize_credential_code(credential_code)
        if not code:
            raise CatalogUnavailable("No credential type given; cannot look up credit requirements.")

        level = infer_credential_level(code)
        defaults = LEVEL_DEFAULTS[level]
        required = defaults["required_credits"]
        months = defaults["typical_duration_months"]

        override = self._overrides.get((_program_key(program_title), code))
        if override:
            if pd.notna(override["required_credits"]) and override["required_credits"] > 0:
                required = int(override["required_credits"])
            if pd.notna(override["typical_duration_months"]) and override["typical_duration_months"] > 0:
                months = int(override["typical_duration_months"])

        return {
            "credential_code": code,
            "credential_name": CREDENTIAL_CATALOG.get(code, {}).get("name", code),
            "level": level,
            "required_credits": required,
            "typical_duration_months": months,
            "is_undergraduate_level": level in UNDERGRADUATE_LEVELS,
        }
