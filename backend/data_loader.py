import os
import re
import sys

import pandas as pd

from normalizer import format_course_code, parse_course_code
from prefix_tables import DisciplineTable

COURSE_COLUMNS = ["institution_id", "prefix", "number", "course_name", "credits", "department", "metadata"]

_DEFAULT_CREDITS = 3
_UNITS_RE = re.compile(r"(\d+(?:\.\d+)?)")
_PREREQ_PATTERNS = (
    re.compile(r"prerequisites?:\s*([^;.]+)", re.IGNORECASE),
    re.compile(r"pre:\s*([^;.]+)", re.IGNORECASE),
    re.compile(r"prereqs?:\s*([^;.]+)", re.IGNORECASE),
)


def parse_credits(raw, default: int = _DEFAULT_CREDITS):
    """
    Credit count from a catalog units field.
    Handles: 3, 3.0, '3', '1-3' (first number), 'V' / '' / NaN (default).
    """
    if raw is None:
        return default
    if isinstance(raw, bool):
        return default
    if isinstance(raw, (int, float)):
        if pd.isna(raw) or raw <= 0:
            return default
        return int(raw) if float(raw).is_integer() else float(raw)
    m = _UNITS_RE.search(str(raw))
    if not m:
        return default
    value = float(m.group(1))
    if value <= 0:
        return default
    return int(value) if value.is_integer() else value


def extract_prerequisites(metadata) -> str:
    """Prerequisite text from a course metadata string, or '' when none is stated."""
    if metadata is None or (isinstance(metadata, float) and pd.isna(metadata)):
        return ""
    text = str(metadata)
    for pattern in _PREREQ_PATTERNS:
        m = pattern.search(text)
        if m:
            return m.group(1).strip()
    return ""


def _read_table(path: str) -> pd.DataFrame:
    ext = os.path.splitext(path)[1].lower()
    if ext == ".json":
        return pd.read_json(path, dtype=False)
    if ext == ".csv":
        return pd.read_csv(path, dtype=str, keep_default_na=False)
    if ext in (".xlsx", ".xls"):
        return pd.read_excel(path, dtype=str)
    raise ValueError(f"Unsupported catalog file type: {path}")


def _clean_str(series: pd.Series) -> pd.Series:
    return series.fillna("").astype(str).str.strip()


def normalize_courses_df(raw_df: pd.DataFrame) -> pd.DataFrame:
    """Map raw catalog columns onto COURSE_COLUMNS. Rows without a usable code are dropped."""
    df = raw_df.copy()

    rename_map = {}
    if "institution_id" not in df.columns and "campus_id" in df.columns:
        rename_map["campus_id"] = "institution_id"
    for src, dst in (
        ("course_prefix", "prefix"),
        ("course_number", "number"),
        ("course_title", "course_name"),
        ("dept_name", "department"),
    ):
        if dst not in df.columns and src in df.columns:
            rename_map[src] = dst
    if "credits" not in df.columns and "num_units" in df.columns:
        rename_map["num_units"] = "credits"
    if rename_map:
        df = df.rename(columns=rename_map)

    # Some exports only carry a combined code column.
    if ("prefix" not in df.columns or "number" not in df.columns) and "course_code" in df.columns:
        parsed = df["course_code"].apply(parse_course_code)
        df["prefix"] = parsed.apply(lambda p: p[0] if p else "")
        df["number"] = parsed.apply(lambda p: p[1] if p else "")

    for col in COURSE_COLUMNS:
        if col not in df.columns:
            df[col] = "" if col != "credits" else None

    for col in ("institution_id", "prefix", "number", "course_name", "department", "metadata"):
        df[col] = _clean_str(df[col])
    df["credits"] = df["credits"].apply(parse_credits).astype(object)

    missing = (df["prefix"] == "") | (df["number"] == "")
    if missing.any():
        print(f"[WARN] Dropped {int(missing.sum())} catalog row(s) without a course prefix/number.")
        df = df[~missing]

    df["course_code"] = [format_course_code(p, n) for p, n in zip(df["prefix"], df["number"])]
    before = len(df)
    df = df.drop_duplicates(subset=["institution_id", "course_code"], keep="first")
    if len(df) < before:
        print(f"[WARN] Dropped {before - len(df)} duplicate course row(s).")

    return df[["course_code"] + COURSE_COLUMNS].reset_index(drop=True)


def load_courses(path: str) -> pd.DataFrame:
    return normalize_courses_df(_read_table(path))


def load_institutions(path: str) -> pd.DataFrame:
    df = _read_table(path)
    for col in ("id", "name", "aliases"):
        if col not in df.columns:
            df[col] = ""
        df[col] = _clean_str(df[col])
    return df[["id", "name", "aliases"]]


class Catalog:
    """Read-only course and institution reference data."""

    def __init__(
        self,
        courses_df: pd.DataFrame,
        institutions_df: pd.DataFrame | None = None,
        discipline_table: DisciplineTable | None = None,
    ):
        self.courses_df = courses_df
        if institutions_df is None:
            ids = sorted(set(courses_df["institution_id"].tolist())) if len(courses_df) else []
            institutions_df = pd.DataFrame({"id": ids, "name": ids, "aliases": [""] * len(ids)})
        self.institutions_df = institutions_df
        self.discipline_table = discipline_table or DisciplineTable()

    def __len__(self) -> int:
        return len(self.courses_df)

    def list_institutions(self) -> list[dict]:
        return [
            {"id": row["id"], "name": row["name"] or row["id"]}
            for _, row in self.institutions_df.iterrows()
        ]

    def get_institution(self, id_or_name: str) -> dict | None:
        """Match on id first, then on display name or any alias (case-insensitive)."""
        key = str(id_or_name or "").strip()
        if not key:
            return None
        low = key.lower()
        rows = list(self.institutions_df.iterrows())
        for _, row in rows:
            if row["id"] == key:
                return self._institution_record(row)
        for _, row in rows:
            aliases = [a.strip().lower() for a in str(row["aliases"]).split("|") if a.strip()]
            if row["id"].lower() == low or row["name"].lower() == low or low in aliases:
                return self._institution_record(row)
        return None

    @staticmethod
    def _institution_record(row) -> dict:
        return {
            "id": row["id"],
            "name": row["name"] or row["id"],
            "aliases": [a.strip() for a in str(row["aliases"]).split("|") if a.strip()],
        }

    def courses_for_institution(self, institution_id: str) -> list[dict]:
        subset = self.courses_df[self.courses_df["institution_id"] == institution_id]
        records = subset.to_dict(orient="records")
        for rec in records:
            rec["prerequisites"] = extract_prerequisites(rec.get("metadata"))
        return records

    def discipline_mapping(self, institution_id: str) -> dict[str, list[str]]:
        return self.discipline_table.disciplines_for(institution_id)

    def known_prefixes(self, institution_id: str) -> list[str]:
        static = self.discipline_table.known_prefixes_for(institution_id)
        if static:
            return static
        subset = self.courses_df[self.courses_df["institution_id"] == institution_id]
        return list(dict.fromkeys(subset["prefix"].tolist()))


def _find_courses_file(data_path: str) -> str | None:
    for name in ("courses.json", "courses.csv", "courses.xlsx"):
        candidate = os.path.join(data_path, name)
        if os.path.isfile(candidate):
            return candidate
    return None


def load_catalog(data_path: str) -> Catalog:
    """Load the catalog directory. Raises on missing files or schema errors."""
    if os.path.isfile(data_path):
        courses_path = data_path
        data_dir = os.path.dirname(data_path)
    else:
        courses_path = _find_courses_file(data_path)
        data_dir = data_path
    if not courses_path:
        raise FileNotFoundError(f"No courses.json/.csv/.xlsx under {data_path}")

    courses_df = load_courses(courses_path)

    institutions_path = os.path.join(data_dir, "institutions.csv")
    institutions_df = load_institutions(institutions_path) if os.path.isfile(institutions_path) else None

    tables_path = os.path.join(data_dir, "discipline_tables.json")
    table = DisciplineTable.from_json(tables_path) if os.path.isfile(tables_path) else DisciplineTable()
    print(f"[INFO] Discipline table version: {table.version}")

    if institutions_df is not None:
        known_ids = set(institutions_df["id"].tolist())
        orphaned = set(courses_df["institution_id"].tolist()) - known_ids
        if orphaned:
            print(
                f"[WARN] {len(orphaned)} institution id(s) in courses not found in institutions.csv: {sorted(orphaned)}",
                file=sys.stderr,
            )

    return Catalog(courses_df, institutions_df, table)
