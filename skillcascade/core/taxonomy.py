"""Taxonomy index for the developmental skills framework.

Structure: Domain → Sub-area → Skill Group → Skill. Every skill carries a
developmental tier (1-5) that is independent of its nesting depth.

Identifiers are hierarchical and stable:
    d1                 domain
    d1-sa1             sub-area
    d1-sa1-sg1         skill group
    d1-sa1-sg1-s1      skill

The taxonomy is a static data asset (data/taxonomy.json), loaded once and
read-only for the lifetime of the process.

Usage:
    from skillcascade.core.taxonomy import get_taxonomy

    taxonomy = get_taxonomy()
    skill = taxonomy.skill("d1-sa1-sg1-s1")
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from skillcascade.core.config import get_settings
from skillcascade.core.logging import get_logger

logger = get_logger(__name__)

DATA_DIR = Path(__file__).parent / "data"
TAXONOMY_FILE = DATA_DIR / "taxonomy.json"

# D1 Regulation is the universal developmental gate
FOUNDATION_DOMAIN_ID = "d1"

MIN_TIER = 1
MAX_TIER = 5

_DOMAIN_RE = re.compile(r"^(d\d+)")
_SUB_AREA_RE = re.compile(r"^(d\d+-sa\d+)")


# =============================================================================
# Errors
# =============================================================================


class TaxonomyIntegrityError(Exception):
    """Raised when the static taxonomy or prerequisite graph is inconsistent."""

    def __init__(self, problems: list[str]):
        self.problems = problems
        preview = "; ".join(problems[:5])
        more = f" (+{len(problems) - 5} more)" if len(problems) > 5 else ""
        super().__init__(f"{len(problems)} integrity problem(s): {preview}{more}")


class UnknownDomainError(KeyError):
    """Raised when a domain id is not part of the taxonomy."""


class UnknownSkillError(KeyError):
    """Raised when a skill id is not part of the taxonomy."""


class UnknownSubAreaError(KeyError):
    """Raised when a sub-area id is not part of the taxonomy."""


# =============================================================================
# Data asset schema
# =============================================================================


class SkillNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    tier: int


class SkillGroupNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    skills: tuple[SkillNode, ...] = ()


class SubAreaNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    skill_groups: tuple[SkillGroupNode, ...] = ()


class DomainNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    subtitle: str | None = None
    core_question: str | None = None
    sub_areas: tuple[SubAreaNode, ...] = ()


class TaxonomyData(BaseModel):
    """Raw taxonomy as stored in the JSON data asset."""

    model_config = ConfigDict(frozen=True)

    domains: tuple[DomainNode, ...] = ()


# =============================================================================
# Index records
# =============================================================================


class Skill(BaseModel):
    """A single assessable skill with its position in the hierarchy."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    tier: int = Field(..., ge=MIN_TIER, le=MAX_TIER)
    domain_id: str
    sub_area_id: str
    skill_group_id: str


class Domain(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    subtitle: str | None = None
    core_question: str | None = None


class SubArea(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    domain_id: str


class TaxonomyStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    domains: int
    sub_areas: int
    skill_groups: int
    skills: int


# =============================================================================
# Id helpers
# =============================================================================


def domain_from_id(entity_id: str) -> str | None:
    """Get domain ID from any entity ID (skill, sub-area, skill group)."""
    match = _DOMAIN_RE.match(entity_id)
    return match.group(1) if match else None


def sub_area_from_id(entity_id: str) -> str | None:
    """Get sub-area ID from a skill or skill-group ID."""
    match = _SUB_AREA_RE.match(entity_id)
    return match.group(1) if match else None


# =============================================================================
# Taxonomy index
# =============================================================================


class Taxonomy:
    """
    Read-only index over the skills framework.

    Built once from TaxonomyData. Construction validates that ids are unique,
    consistent with their position in the hierarchy, and that every tier is
    within 1-5; any violation raises TaxonomyIntegrityError.
    """

    def __init__(self, data: TaxonomyData):
        problems: list[str] = []

        domains: dict[str, Domain] = {}
        sub_areas: dict[str, SubArea] = {}
        skills: dict[str, Skill] = {}
        by_domain: dict[str, list[str]] = {}
        by_sub_area: dict[str, list[str]] = {}
        skill_group_count = 0

        for domain in data.domains:
            if domain.id in domains:
                problems.append(f"duplicate domain id {domain.id}")
            domains[domain.id] = Domain(
                id=domain.id,
                name=domain.name,
                subtitle=domain.subtitle,
                core_question=domain.core_question,
            )
            by_domain.setdefault(domain.id, [])

            for sa in domain.sub_areas:
                if sa.id in sub_areas:
                    problems.append(f"duplicate sub-area id {sa.id}")
                if domain_from_id(sa.id) != domain.id:
                    problems.append(f"sub-area {sa.id} is nested under domain {domain.id}")
                sub_areas[sa.id] = SubArea(id=sa.id, name=sa.name, domain_id=domain.id)
                by_sub_area.setdefault(sa.id, [])

                for sg in sa.skill_groups:
                    skill_group_count += 1
                    if sub_area_from_id(sg.id) != sa.id:
                        problems.append(f"skill group {sg.id} is nested under sub-area {sa.id}")

                    for node in sg.skills:
                        if node.id in skills:
                            problems.append(f"duplicate skill id {node.id}")
                            continue
                        if not node.id.startswith(f"{sg.id}-s"):
                            problems.append(f"skill {node.id} is nested under skill group {sg.id}")
                        if not MIN_TIER <= node.tier <= MAX_TIER:
                            problems.append(f"skill {node.id} has tier {node.tier} outside 1-5")
                            continue
                        skills[node.id] = Skill(
                            id=node.id,
                            name=node.name,
                            tier=node.tier,
                            domain_id=domain.id,
                            sub_area_id=sa.id,
                            skill_group_id=sg.id,
                        )
                        by_domain[domain.id].append(node.id)
                        by_sub_area[sa.id].append(node.id)

        if problems:
            logger.error(f"Taxonomy failed integrity checks: {problems}")
            raise TaxonomyIntegrityError(problems)

        self._domains = MappingProxyType(domains)
        self._sub_areas = MappingProxyType(sub_areas)
        self._skills = MappingProxyType(skills)
        self._by_domain = MappingProxyType({k: tuple(v) for k, v in by_domain.items()})
        self._by_sub_area = MappingProxyType({k: tuple(v) for k, v in by_sub_area.items()})
        self._stats = TaxonomyStats(
            domains=len(domains),
            sub_areas=len(sub_areas),
            skill_groups=skill_group_count,
            skills=len(skills),
        )

    def __len__(self) -> int:
        return len(self._skills)

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self._skills

    # -------------------------------------------------------------------------
    # Skills
    # -------------------------------------------------------------------------

    def has_skill(self, skill_id: str) -> bool:
        return skill_id in self._skills

    def skill(self, skill_id: str) -> Skill:
        """Get a skill by id. Raises UnknownSkillError if absent."""
        try:
            return self._skills[skill_id]
        except KeyError:
            raise UnknownSkillError(skill_id) from None

    def skills(self) -> tuple[Skill, ...]:
        """All skills in taxonomy order (domain, sub-area, group, skill)."""
        return tuple(self._skills.values())

    def skill_ids(self) -> tuple[str, ...]:
        return tuple(self._skills)

    def tier_of(self, skill_id: str) -> int:
        """Developmental tier (1-5) of a skill."""
        return self.skill(skill_id).tier

    def skill_ids_in_domain(self, domain_id: str) -> tuple[str, ...]:
        return self._by_domain.get(domain_id, ())

    def skill_ids_in_sub_area(self, sub_area_id: str) -> tuple[str, ...]:
        return self._by_sub_area.get(sub_area_id, ())

    # -------------------------------------------------------------------------
    # Domains and sub-areas
    # -------------------------------------------------------------------------

    def has_domain(self, domain_id: str) -> bool:
        return domain_id in self._domains

    def domain(self, domain_id: str) -> Domain:
        """Get a domain by id. Raises UnknownDomainError if absent."""
        try:
            return self._domains[domain_id]
        except KeyError:
            raise UnknownDomainError(domain_id) from None

    def domain_ids(self) -> tuple[str, ...]:
        return tuple(self._domains)

    def has_sub_area(self, sub_area_id: str) -> bool:
        return sub_area_id in self._sub_areas

    def sub_area(self, sub_area_id: str) -> SubArea:
        """Get a sub-area by id. Raises UnknownSubAreaError if absent."""
        try:
            return self._sub_areas[sub_area_id]
        except KeyError:
            raise UnknownSubAreaError(sub_area_id) from None

    def sub_area_ids(self) -> tuple[str, ...]:
        return tuple(self._sub_areas)

    def stats(self) -> TaxonomyStats:
        return self._stats


# =============================================================================
# Loading
# =============================================================================


def load_taxonomy_data(path: Path | str | None = None) -> TaxonomyData:
    """
    Load and parse the taxonomy data asset.

    Args:
        path: JSON file to load; defaults to the bundled asset

    Returns:
        Parsed TaxonomyData

    Raises:
        TaxonomyIntegrityError: If the file cannot be read or parsed
    """
    source = Path(path) if path else TAXONOMY_FILE
    try:
        return TaxonomyData.model_validate_json(source.read_bytes())
    except (OSError, ValidationError) as e:
        logger.error(f"Failed to load taxonomy from {source}: {e}")
        raise TaxonomyIntegrityError([f"cannot load taxonomy from {source}: {e}"]) from e


@lru_cache(maxsize=1)
def get_taxonomy() -> Taxonomy:
    """Get the process-wide taxonomy, built on first use."""
    settings = get_settings()
    taxonomy = Taxonomy(load_taxonomy_data(settings.TAXONOMY_PATH))
    stats = taxonomy.stats()
    logger.info(
        f"Loaded taxonomy: {stats.domains} domains, {stats.sub_areas} sub-areas, "
        f"{stats.skill_groups} skill groups, {stats.skills} skills"
    )
    return taxonomy
