"""
Generate a roadmap from the command line.

Usage:
  python scripts/generate_roadmap.py --institution uh_manoa --program "Computer Science" --credential BS
  python scripts/generate_roadmap.py ... --dry-run     # print prefixes, curated list and prompt only
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
BACKEND_DIR = REPO_ROOT / "backend"
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from config import get_curation_config, get_data_path  # noqa: E402
from credentials import CredentialTable, duration_years  # noqa: E402
from data_loader import load_catalog  # noqa: E402
from errors import CatalogUnavailable, RoadmapError  # noqa: E402
from roadmap_pipeline import generate_roadmap, prepare_generation, select_courses  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a multi-year academic roadmap.")
    parser.add_argument("--institution", required=True, help="Institution id, name or alias.")
    parser.add_argument("--program", required=True, help="Program title, e.g. 'Computer Science'.")
    parser.add_argument("--credential", required=True, help="Credential code, e.g. BS, AA.")
    parser.add_argument("--data-path", default=None, help="Catalog directory (default: DATA_PATH or ./data).")
    parser.add_argument("--skills", default="", help="Comma-separated prioritized skills.")
    parser.add_argument("--dry-run", action="store_true", help="Stop before calling the model.")
    return parser.parse_args(argv)


def _dry_run(catalog, credentials, args, skills) -> dict:
    inst = catalog.get_institution(args.institution)
    if inst is None:
        raise CatalogUnavailable(f"Institution '{args.institution}' not found in catalog.")
    requirement = credentials.requirements_for(args.program, args.credential)
    prefixes, curated = select_courses(catalog, inst, args.program, requirement, get_curation_config())
    years = duration_years(requirement["typical_duration_months"])
    policy, data = prepare_generation(
        curated,
        args.program,
        requirement["credential_name"],
        inst["name"],
        requirement["required_credits"],
        years,
        requirement["is_undergraduate_level"],
        skills,
    )
    return {
        "prefixes": prefixes,
        "requirement": requirement,
        "curated_codes": [c["course_code"] for c in curated],
        "policy": policy,
        "data": data,
    }


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    data_path = args.data_path or get_data_path()
    skills = [s.strip() for s in args.skills.split(",") if s.strip()]

    try:
        catalog = load_catalog(data_path)
        credentials = CredentialTable.from_csv(str(Path(data_path) / "credential_requirements.csv"))
    except FileNotFoundError as exc:
        print(f"[generate-roadmap] ERROR: {exc}", file=sys.stderr)
        return 1

    try:
        if args.dry_run:
            result = _dry_run(catalog, credentials, args, skills)
        else:
            result = generate_roadmap(
                catalog,
                credentials,
                args.institution,
                args.program,
                args.credential,
                prioritized_skills=skills,
            )
            result = {"plan": result["plan"], "report": result["report"], "prefixes": result["prefixes"]}
    except RoadmapError as exc:
        print(f"[generate-roadmap] {exc.error_code}: {exc.message}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
