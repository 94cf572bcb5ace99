"""
End-to-end roadmap generation for one request.

    resolve prefixes -> curate courses -> generate (model, untrusted)
                     -> verify and repair (deterministic)

Nothing here keeps state between calls; the catalog and credential table are
read-only reference data.
"""

from collections.abc import Callable

from config import CurationConfig, get_curation_config
from course_curator import curate_courses, summarize_levels
from credentials import CredentialTable, duration_years
from data_loader import Catalog
from discipline_resolver import resolve_prefixes
from errors import CatalogUnavailable, ResolutionError
from llm_planner import call_openai
from plan_parser import parse_plan
from prompt_builder import build_data_block, build_policy_block
from validators import validate_and_repair_plan

PlanGenerator = Callable[[str, str], str]


def prepare_generation(
    curated: list[dict],
    program_title: str,
    credential_name: str,
    institution_name: str,
    required_credits,
    years: int,
    is_undergraduate: bool,
    prioritized_skills: list[str] | None = None,
) -> tuple[str, str]:
    """(policy, data) payload for the model."""
    policy = build_policy_block(is_undergraduate, required_credits, years)
    data = build_data_block(
        curated,
        program_title,
        credential_name,
        institution_name,
        required_credits,
        years,
        prioritized_skills,
    )
    return policy, data


def generate_candidate_plan(policy: str, data: str, generate: PlanGenerator | None = None) -> dict:
    """Speculative phase: one model call, strictly parsed, not yet trusted."""
    generate = generate or call_openai
    return parse_plan(generate(policy, data))


def select_courses(
    catalog: Catalog,
    institution: dict,
    program_title: str,
    requirement: dict,
    config: CurationConfig,
) -> tuple[list[str], list[dict]]:
    """Resolved prefixes and the curated course list for one institution/program pair."""
    institution_id = institution["id"]
    courses = catalog.courses_for_institution(institution_id)
    if not courses:
        raise CatalogUnavailable(f"No course data available for {institution['name']}.")

    prefixes = resolve_prefixes(
        institution_id,
        program_title,
        table=catalog.discipline_table,
        known_prefixes=catalog.known_prefixes(institution_id),
        max_prefixes=config.max_prefixes,
    )
    if not prefixes:
        raise ResolutionError(
            f"Could not identify relevant courses for '{program_title}' at {institution['name']}."
        )

    prefix_set = set(prefixes)
    relevant = [c for c in courses if c.get("prefix") in prefix_set]
    if not relevant:
        raise ResolutionError(
            f"No {', '.join(prefixes)} courses found for '{program_title}' at {institution['name']}."
        )

    years = duration_years(requirement["typical_duration_months"])
    curated = curate_courses(relevant, requirement["required_credits"], years, config)
    print(
        f"[INFO] Prefixes {prefixes}: {len(relevant)} course(s) -> {len(curated)} curated "
        f"{summarize_levels(curated)}"
    )
    return prefixes, curated


def generate_roadmap(
    catalog: Catalog,
    credentials: CredentialTable,
    institution: str,
    program_title: str,
    credential_code: str,
    prioritized_skills: list[str] | None = None,
    generate: PlanGenerator | None = None,
    config: CurationConfig | None = None,
) -> dict:
    """
    Returns:
      {
        "plan": {...},            # repaired GeneratedPlan
        "report": {...},          # validator diagnostics
        "prefixes": ["ICS", "DATA"],
        "curated_codes": ["ICS 111", ...],
        "requirement": {...},
      }
    Raises CatalogUnavailable, ResolutionError, GenerationParseError or
    GenerationUnavailable; any of these means no plan.
    """
    config = config or get_curation_config()

    inst = catalog.get_institution(institution)
    if inst is None:
        raise CatalogUnavailable(f"Institution '{institution}' not found in catalog.")

    requirement = credentials.requirements_for(program_title, credential_code)
    years = duration_years(requirement["typical_duration_months"])

    prefixes, curated = select_courses(catalog, inst, program_title, requirement, config)
    curated_codes = [c["course_code"] for c in curated]

    policy, data = prepare_generation(
        curated,
        program_title,
        requirement["credential_name"],
        inst["name"],
        requirement["required_credits"],
        years,
        requirement["is_undergraduate_level"],
        prioritized_skills,
    )
    candidate = generate_candidate_plan(policy, data, generate)

    plan, report = validate_and_repair_plan(
        candidate,
        curated_codes,
        required_credits=requirement["required_credits"],
        expected_years=years,
        over_target_ratio=config.over_target_ratio,
    )
    return {
        "plan": plan,
        "report": report,
        "prefixes": prefixes,
        "curated_codes": curated_codes,
        "requirement": requirement,
    }
