PLACEHOLDER_LABELS = ("Gen Ed Requirement", "Support Course", "Elective", "Thesis/Capstone", "Capstone")
SEMESTER_NAMES = ("fall_semester", "spring_semester", "summer_semester")

_OUTPUT_SCHEMA = """{
  "program_name": "string",
  "institution": "string",
  "total_credits": number,
  "years": [
    {
      "year_number": 1,
      "semesters": [
        {
          "semester_name": "fall_semester" | "spring_semester" | "summer_semester",
          "credits": number,
          "courses": [ { "name": "COURSE CODE or placeholder label", "credits": number } ]
        }
      ]
    }
  ]
}"""


def build_policy_block(is_undergraduate: bool, required_credits, duration_years) -> str:
    """
    Fixed rules for the model: output schema, vocabulary, placeholder ratio
    and pacing. The same inputs always produce the same text.
    """
    if is_undergraduate:
        vocabulary = (
            'Allowed placeholder labels: "Gen Ed Requirement", "Support Course", '
            '"Elective", "Thesis/Capstone".\n'
            "- Use \"Gen Ed Requirement\" for general education slots; about 30-40% of "
            "total credits should be Gen Ed Requirement placeholders.\n"
            "- Use \"Support Course\" for required courses outside the major's prefixes."
        )
    else:
        vocabulary = (
            'Allowed placeholder labels: "Elective", "Thesis/Capstone", "Capstone".\n'
            "- This is not an undergraduate program: do NOT use Gen Ed Requirement or "
            "Support Course placeholders.\n"
            "- Keep placeholders to at most 15% of total credits; the rest must be "
            "courses from the list."
        )

    return f"""You are an academic planning assistant building a semester-by-semester degree plan.
You will receive a curated list of real courses. All catalog lookups have already been done.

Rules:
1. Use ONLY course codes that appear literally in the provided course list, or one of the
   allowed placeholder labels. Never invent, modify or abbreviate a course code.
2. {vocabulary}
3. Put lower-level courses (100/200) in earlier years and higher-level or specialized
   courses (300/400) and capstone work in later years. Respect the [Prereq: ...] notes
   where given.
4. Plan exactly {duration_years} year(s), numbered 1 to {duration_years}. Fall and spring
   semesters carry 12-16 credits; summer semesters are optional and lighter.
5. Total credits across the plan should be close to {required_credits} (not below it,
   not more than 10% above it).
6. Use each course code at most once.

Output ONLY one valid JSON object. No markdown. No prose outside the JSON.
Schema (output exactly this structure):
{_OUTPUT_SCHEMA}"""


def format_course_line(course: dict) -> str:
    code = course.get("course_code") or f"{course.get('prefix', '')} {course.get('number', '')}".strip()
    line = f"{code}: {course.get('course_name', '')} ({course.get('credits', 3)} cr)"
    prereq = str(course.get("prerequisites", "") or "").strip()
    if prereq:
        line += f" [Prereq: {prereq}]"
    return line


def build_data_block(
    curated: list[dict],
    program_title: str,
    credential_name: str,
    institution_name: str,
    required_credits,
    duration_years,
    prioritized_skills: list[str] | None = None,
) -> str:
    """
    Builds the user message sent to the LLM.
    The LLM only receives the curated list; it never sees the full catalog.
    """
    context_lines = [
        f"Institution: {institution_name}",
        f"Program: {program_title}",
        f"Credential: {credential_name}",
        f"Required credits: {required_credits}",
        f"Duration: {duration_years} year(s)",
    ]
    skills = [str(s).strip() for s in (prioritized_skills or []) if str(s).strip()]
    if skills:
        context_lines.append(f"Prioritized skills: {', '.join(skills)}")
    context_lines.append("")
    context_lines.append(f"Available courses ({len(curated)}):")
    for course in curated:
        context_lines.append(format_course_line(course))

    return "\n".join(context_lines)
