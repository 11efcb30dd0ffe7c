"""
Skill Taxonomy Value Object - Clean Architecture Domain Layer

Classification policy for skills: category table, importance tiers and the
prerequisite map. Kept as injectable data so the policy can change (or be
loaded from a file) without touching the graph builder.

Matching is bidirectional substring: a skill name matches a table entry if
either string contains the other. Tables are scanned in declared order and
the first match wins.
"""
from dataclasses import dataclass
from typing import Any, List, Mapping, Sequence, Tuple

from ..entities.skill_node import DEFAULT_CATEGORY, SkillImportance


def names_match(skill: str, entry: str) -> bool:
    """Bidirectional substring match"""
    return entry in skill or skill in entry


_DEFAULT_CATEGORIES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Programming", ("Python", "JavaScript", "TypeScript", "Java", "C++", "React", "Node.js")),
    ("AI/ML", ("머신러닝", "Machine Learning", "딥러닝", "Deep Learning", "TensorFlow", "PyTorch", "Scikit-learn")),
    ("Data", ("데이터 분석", "Data Analysis", "SQL", "PostgreSQL", "MongoDB", "Pandas", "NumPy")),
    ("Tools", ("Git", "Docker", "Kubernetes", "AWS", "GCP", "Jenkins", "Linux")),
    ("Soft Skills", ("커뮤니케이션", "팀워크", "문제 해결", "프로젝트 관리", "리더십")),
    ("Math", ("선형대수", "확률통계", "미적분학", "최적화")),
)

_DEFAULT_CORE: Tuple[str, ...] = ("Python", "머신러닝", "SQL", "데이터 분석")
_DEFAULT_IMPORTANT: Tuple[str, ...] = ("딥러닝", "TensorFlow", "Git", "문제 해결")

_DEFAULT_PREREQUISITES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("딥러닝", ("머신러닝", "Python")),
    ("TensorFlow", ("Python", "딥러닝")),
    ("PyTorch", ("Python", "딥러닝")),
    ("MLOps", ("머신러닝", "Docker")),
    ("Kubernetes", ("Docker",)),
    ("데이터 시각화", ("데이터 분석", "Python")),
)


@dataclass(frozen=True)
class SkillTaxonomy:
    """
    Immutable classification tables.

    Attributes:
        categories:    Ordered (category, entries) pairs.
        core:          Entries classified as core importance.
        important:     Entries classified as important (checked after core).
        prerequisites: Ordered (skill, prerequisite names) pairs.
    """

    categories: Tuple[Tuple[str, Tuple[str, ...]], ...] = _DEFAULT_CATEGORIES
    core: Tuple[str, ...] = _DEFAULT_CORE
    important: Tuple[str, ...] = _DEFAULT_IMPORTANT
    prerequisites: Tuple[Tuple[str, Tuple[str, ...]], ...] = _DEFAULT_PREREQUISITES

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def categorize(self, skill: str) -> str:
        for category, entries in self.categories:
            if any(names_match(skill, entry) for entry in entries):
                return category
        return DEFAULT_CATEGORY

    def importance_of(self, skill: str) -> SkillImportance:
        if any(names_match(skill, entry) for entry in self.core):
            return SkillImportance.CORE
        if any(names_match(skill, entry) for entry in self.important):
            return SkillImportance.IMPORTANT
        return SkillImportance.USEFUL

    def prerequisites_of(self, skill: str) -> List[str]:
        for entry, required in self.prerequisites:
            if names_match(skill, entry):
                return list(required)
        return []

    # ------------------------------------------------------------------
    # Factory helpers
    # ------------------------------------------------------------------

    @classmethod
    def default(cls) -> "SkillTaxonomy":
        """Tables used by the platform's roadmap views"""
        return cls()

    @classmethod
    def empty(cls) -> "SkillTaxonomy":
        """Classifies everything as Other / useful with no prerequisites"""
        return cls(categories=(), core=(), important=(), prerequisites=())

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SkillTaxonomy":
        """
        Build a taxonomy from plain data (e.g. parsed JSON).

        Keys are optional; a missing key keeps the default table for that
        concern. Mapping order is preserved for first-match-wins lookups.

        Raises:
            ValueError: If any table holds a blank key or entry.
        """
        defaults = cls()
        return cls(
            categories=_pairs(data["categories"], "categories") if "categories" in data else defaults.categories,
            core=_entries(data["core"], "core") if "core" in data else defaults.core,
            important=_entries(data["important"], "important") if "important" in data else defaults.important,
            prerequisites=_pairs(data["prerequisites"], "prerequisites") if "prerequisites" in data else defaults.prerequisites,
        )


def _entries(values: Sequence[str], table: str) -> Tuple[str, ...]:
    # A blank entry is a substring of every skill name
    entries = tuple(str(v) for v in values)
    if any(not entry.strip() for entry in entries):
        raise ValueError(f"Taxonomy table '{table}' contains a blank entry")
    return entries


def _pairs(table: Mapping[str, Sequence[str]], name: str) -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
    pairs = []
    for key, values in table.items():
        if not str(key).strip():
            raise ValueError(f"Taxonomy table '{name}' contains a blank key")
        pairs.append((str(key), _entries(values, name)))
    return tuple(pairs)
