"""
Skill alias table shared by the scorer, the skill extractor and the
candidate search.

Every alias maps to exactly one canonical label. Matching is
case-insensitive and word-bounded, so "java" never matches "javascript"
and the one-letter "r" never matches inside another word.
"""
import re
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Tuple

# canonical label -> aliases (lowercase, underscores written as spaces)
SKILL_ALIASES: Dict[str, Tuple[str, ...]] = {
    "Python": ("python", "python3", "python2", "py"),
    "Java": ("java", "java programming"),
    "JavaScript": ("javascript", "js", "ecmascript"),
    "TypeScript": ("typescript", "ts"),
    "R": ("r", "r programming", "r language"),
    "Go": ("golang", "go"),
    "C++": ("c++", "cpp"),
    "C#": ("c#", "csharp"),
    "SQL": ("sql",),
    "MySQL": ("mysql",),
    "PostgreSQL": ("postgresql", "postgres"),
    "MongoDB": ("mongodb", "mongo"),
    "Redis": ("redis",),
    "Elasticsearch": ("elasticsearch", "elastic search"),
    "Machine Learning": ("machine learning", "ml", "machinelearning"),
    "Artificial Intelligence": ("artificial intelligence", "ai", "artificialintelligence"),
    "Data Science": ("data science", "datascience", "ds"),
    "Deep Learning": ("deep learning", "dl", "deeplearning"),
    "Neural Networks": ("neural networks", "neuralnetworks", "nn"),
    "Natural Language Processing": ("natural language processing", "nlp"),
    "Computer Vision": ("computer vision",),
    "OpenCV": ("opencv", "open cv", "cv"),
    "TensorFlow": ("tensorflow", "tensor flow", "tf"),
    "PyTorch": ("pytorch", "torch"),
    "Scikit-learn": ("scikit-learn", "sklearn", "scikit learn"),
    "NumPy": ("numpy", "num py", "np"),
    "Pandas": ("pandas", "pan das", "pd"),
    "Matplotlib": ("matplotlib", "plt"),
    "Seaborn": ("seaborn", "sns"),
    "React": ("react", "react.js", "reactjs", "react js"),
    "Node.js": ("node.js", "nodejs", "node js", "node"),
    "Angular": ("angular", "angularjs"),
    "Vue.js": ("vue.js", "vuejs", "vue"),
    "Django": ("django",),
    "Flask": ("flask",),
    "FastAPI": ("fastapi",),
    "Spring Boot": ("spring boot", "springboot"),
    "AWS": ("aws", "amazon web services"),
    "Google Cloud": ("google cloud", "gcp", "google cloud platform", "g cloud"),
    "Azure": ("azure", "microsoft azure"),
    "Docker": ("docker",),
    "Kubernetes": ("kubernetes", "k8s"),
    "Terraform": ("terraform",),
    "Git": ("git",),
    "Jenkins": ("jenkins",),
    "Apache Spark": ("apache spark", "spark"),
    "Hadoop": ("hadoop",),
    "Kafka": ("kafka", "apache kafka"),
    "Airflow": ("airflow", "apache airflow"),
    "Power BI": ("power bi", "powerbi"),
    "Tableau": ("tableau",),
    "Excel": ("excel", "ms excel", "microsoft excel"),
    "Linux": ("linux",),
    "Agile": ("agile",),
    "Scrum": ("scrum",),
    "DevOps": ("devops",),
    "HTML": ("html", "html5"),
    "CSS": ("css", "css3"),
}

# Short aliases that mean something else in prose ("cv", "ds", "go", ...).
# They still count when a skill list entry holds the alias, but free text
# (resume scan, headline, summary) ignores them.
AMBIGUOUS_ALIASES = frozenset({
    "r", "go", "py", "ds", "dl", "nn", "cv", "tf", "np", "pd", "plt", "sns",
    "ts", "node", "torch", "mongo",
})

# Characters that continue a word; anything else is a boundary.
WORD_CHARS = "a-z0-9+#"
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_skill(skill: str) -> str:
    """Lowercase, turn underscores into spaces and collapse whitespace."""
    if not skill:
        return ""
    return _WHITESPACE_RE.sub(" ", str(skill).replace("_", " ")).strip().lower()


def _build_alias_index() -> Dict[str, str]:
    index: Dict[str, str] = {}
    for canonical, aliases in SKILL_ALIASES.items():
        for alias in (normalize_skill(canonical),) + aliases:
            existing = index.get(alias)
            if existing is not None and existing != canonical:
                raise ValueError(f"Alias {alias!r} maps to both {existing!r} and {canonical!r}")
            index[alias] = canonical
    return index


_ALIAS_INDEX = _build_alias_index()


@lru_cache(maxsize=1024)
def _bounded_pattern(term: str) -> "re.Pattern[str]":
    return re.compile(rf"(?<![{WORD_CHARS}]){re.escape(term)}(?![{WORD_CHARS}])")


def contains_term(text: str, term: str) -> bool:
    """True if ``term`` occurs in ``text`` as a whole word (both normalized)."""
    if not term or not text:
        return False
    return _bounded_pattern(term).search(text) is not None


def canonical_skill(skill: str) -> Optional[str]:
    """Return the canonical label for a skill or alias, or None if unknown."""
    return _ALIAS_INDEX.get(normalize_skill(skill))


def canonicalize_skills(skills: Iterable[str]) -> List[str]:
    """Map skills to canonical labels, de-duplicated, keeping first-seen order.

    Unknown skills are kept as written (trimmed).
    """
    result: List[str] = []
    seen = set()
    for skill in skills:
        if not isinstance(skill, str) or not skill.strip():
            continue
        label = canonical_skill(skill) or skill.strip()
        key = normalize_skill(label)
        if key in seen:
            continue
        seen.add(key)
        result.append(label)
    return result


def skill_terms(skill: str) -> Tuple[str, ...]:
    """Normalized spellings that count as ``skill``.

    The skill as written comes first, followed by the canonical label and
    every alias when the skill is in the table. Unknown skills yield just
    themselves.
    """
    term = normalize_skill(skill)
    if not term:
        return ()
    terms = [term]
    canonical = _ALIAS_INDEX.get(term)
    if canonical is not None:
        for alias in (normalize_skill(canonical),) + SKILL_ALIASES[canonical]:
            if alias not in terms:
                terms.append(alias)
    return tuple(terms)


def prose_terms(skill: str) -> Tuple[str, ...]:
    """``skill_terms`` without the ambiguous short aliases, for free text."""
    return tuple(term for term in skill_terms(skill) if term not in AMBIGUOUS_ALIASES)


def skills_match(required: str, candidate: str) -> bool:
    """Decide whether a candidate skill entry satisfies a required skill.

    True when any spelling of the required skill occurs in the entry as a
    whole word: "python" / "Python", "Machine Learning" / "ML",
    "React" / "React Native". The candidate search compiles the same rule.
    """
    cand = normalize_skill(candidate)
    if not cand:
        return False
    return any(contains_term(cand, term) for term in skill_terms(required))


def any_skill_matches(required: str, candidate_skills: Iterable[str]) -> bool:
    return any(skills_match(required, cand) for cand in candidate_skills)


def mentions_skill(text: Optional[str], skill: str) -> bool:
    """True if free text names ``skill`` by an unambiguous spelling."""
    content = normalize_skill(text)
    if not content:
        return False
    return any(contains_term(content, term) for term in prose_terms(skill))


def scan_text_for_skills(text: str) -> List[str]:
    """Find canonical skills mentioned anywhere in free text."""
    content = normalize_skill(text)
    if not content:
        return []
    found: List[str] = []
    for canonical, aliases in SKILL_ALIASES.items():
        for alias in (normalize_skill(canonical),) + aliases:
            if alias in AMBIGUOUS_ALIASES:
                continue
            if contains_term(content, alias):
                found.append(canonical)
                break
    return found
