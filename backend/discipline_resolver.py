import re

from prefix_tables import DisciplineTable

MAX_PREFIXES = 15
MIN_TOKEN_LENGTH = 4

_WORD_RE = re.compile(r"[^\W\d_]+")
# Hawaiian ʻokina and apostrophes join a word rather than split it.
_INNER_MARKS_RE = re.compile("[\u02bb\u2018\u2019']")

_default_table = DisciplineTable()


def tokenize_title(program_title: str) -> list[str]:
    """Lowercase alphabetic words longer than three characters, in title order."""
    words = _WORD_RE.findall(_INNER_MARKS_RE.sub("", program_title or ""))
    return [w.lower() for w in words if len(w) >= MIN_TOKEN_LENGTH]


def _first_word(program_title: str) -> str:
    m = _WORD_RE.search(_INNER_MARKS_RE.sub("", program_title or ""))
    return m.group(0) if m else ""


def match_prefix_directly(word: str, known_prefixes: list[str]) -> list[str]:
    """
    Catch single-word disciplines with an eponymous prefix:
    'Art' -> ART (exact), 'Chemistry' -> CHEM (first four letters).
    """
    word = (word or "").strip().upper()
    if not word:
        return []
    head = word[:4]
    matches = []
    for prefix in known_prefixes:
        p = str(prefix).strip()
        if not p:
            continue
        up = p.upper()
        if up == word or (len(word) >= 4 and up == head):
            matches.append(p)
    return matches


def resolve_prefixes(
    institution_id: str,
    program_title: str,
    table: DisciplineTable | None = None,
    known_prefixes: list[str] | None = None,
    max_prefixes: int = MAX_PREFIXES,
) -> list[str]:
    """
    Map a free-text program title to the course prefixes worth curating.

    Keyword matches come first, in title order, followed by direct prefix
    matches on the title's first word. The union keeps discovery order and is
    truncated to max_prefixes. An empty list means nothing matched; callers
    treat that as a failure, never as "all courses".

    Adding words after the first never removes a prefix. A word put in front
    replaces the first word, so its direct match can be lost.
    """
    table = table or _default_table
    if known_prefixes is None:
        known_prefixes = table.known_prefixes_for(institution_id)

    found: list[str] = []

    def _add(prefixes):
        for p in prefixes:
            if p not in found:
                found.append(p)

    for token in tokenize_title(program_title):
        _add(table.resolve(institution_id, token))

    _add(match_prefix_directly(_first_word(program_title), known_prefixes))

    return found[:max_prefixes]
