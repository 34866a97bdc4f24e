"""Cross-domain skill dependency model.

Three layers of static dependency data (data/prerequisites.json):
  1. skill_prerequisites   : specific skill-to-skill prerequisite links
  2. sub_area_prerequisites: cross-domain sub-area structural prerequisites
  3. domain_relationships  : 'requires' (hard gate) vs 'supports' (facilitative)

Skill tiers come from the taxonomy. Tier logic for structural prerequisites:
a skill at tier N requires the tier <= N skills of its prerequisite sub-areas.

Within-domain sub-area progression is implicit and not modeled as edges.

The graph, its reverse index and the transitive downstream closures are built
once and never change at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, ValidationError

from skillcascade.core.config import get_settings
from skillcascade.core.logging import get_logger
from skillcascade.core.taxonomy import (
    DATA_DIR,
    Taxonomy,
    TaxonomyIntegrityError,
    domain_from_id,
    get_taxonomy,
)

logger = get_logger(__name__)

PREREQUISITES_FILE = DATA_DIR / "prerequisites.json"


class DependencyType(str, Enum):
    """How a dependent domain relates to a prerequisite domain."""

    REQUIRES = "requires"  # Blocking: true developmental gate
    SUPPORTS = "supports"  # Facilitative: weakness degrades but never gates


# =============================================================================
# Data asset schema
# =============================================================================


class DomainRelationshipData(BaseModel):
    model_config = ConfigDict(frozen=True)

    dependent: str
    prerequisite: str
    type: str


class PrerequisiteData(BaseModel):
    """Raw prerequisite graph as stored in the JSON data asset."""

    model_config = ConfigDict(frozen=True)

    skill_prerequisites: dict[str, tuple[str, ...]] = {}
    sub_area_prerequisites: dict[str, tuple[str, ...]] = {}
    domain_relationships: tuple[DomainRelationshipData, ...] = ()


class DomainChordMatrix(BaseModel):
    """Cross-domain sub-area dependency counts.

    matrix[i][j] = number of sub-area edges from domain_ids[i] (dependent)
    to domain_ids[j] (prerequisite). Same-domain edges are excluded.
    """

    model_config = ConfigDict(frozen=True)

    domain_ids: tuple[str, ...]
    matrix: tuple[tuple[int, ...], ...]


# =============================================================================
# Graph
# =============================================================================


class PrerequisiteGraph:
    """
    Immutable prerequisite graph over a taxonomy.

    Construction validates that the graph is closed over the taxonomy and
    raises TaxonomyIntegrityError otherwise.
    """

    def __init__(self, taxonomy: Taxonomy, data: PrerequisiteData):
        _validate(taxonomy, data)

        self.taxonomy = taxonomy

        self._prereqs = MappingProxyType(
            {skill_id: tuple(prereqs) for skill_id, prereqs in data.skill_prerequisites.items()}
        )
        self._reverse = MappingProxyType(_reverse_index(self._prereqs))

        self._sub_area_prereqs = MappingProxyType(
            {sa_id: tuple(prereqs) for sa_id, prereqs in data.sub_area_prerequisites.items()}
        )
        self._sub_area_reverse = MappingProxyType(_reverse_index(self._sub_area_prereqs))

        self._relationships = MappingProxyType(
            {
                (rel.dependent, rel.prerequisite): DependencyType(rel.type)
                for rel in data.domain_relationships
            }
        )

        self._closures = MappingProxyType(_transitive_closures(self._reverse))

    # -------------------------------------------------------------------------
    # Skill-to-skill edges
    # -------------------------------------------------------------------------

    def direct_prerequisites(self, skill_id: str) -> tuple[str, ...]:
        """Direct prerequisite skills of a skill (empty if none)."""
        return self._prereqs.get(skill_id, ())

    def has_prerequisites(self, skill_id: str) -> bool:
        return skill_id in self._prereqs

    def skills_with_prerequisites(self) -> tuple[str, ...]:
        """Dependent skills, in data order."""
        return tuple(self._prereqs)

    def dependents(self, skill_id: str) -> tuple[str, ...]:
        """Skills that list this skill as a direct prerequisite."""
        return self._reverse.get(skill_id, ())

    def prerequisite_skills(self) -> tuple[str, ...]:
        """Skills that are a prerequisite of at least one other skill."""
        return tuple(self._reverse)

    def transitive_dependents(self, skill_id: str) -> frozenset[str]:
        return self._closures.get(skill_id, frozenset())

    def transitive_downstream(self, skill_id: str) -> int:
        """Number of skills reachable downstream through prerequisite edges."""
        return len(self.transitive_dependents(skill_id))

    def edge_count(self) -> int:
        return sum(len(prereqs) for prereqs in self._prereqs.values())

    # -------------------------------------------------------------------------
    # Sub-area and domain layers
    # -------------------------------------------------------------------------

    def sub_area_prerequisites(self, sub_area_id: str) -> tuple[str, ...]:
        return self._sub_area_prereqs.get(sub_area_id, ())

    def sub_area_dependents(self, sub_area_id: str) -> tuple[str, ...]:
        return self._sub_area_reverse.get(sub_area_id, ())

    def relationship(self, dependent_domain: str, prerequisite_domain: str) -> DependencyType:
        """Dependency type between two domains. Same-domain and unspecified pairs are 'requires'."""
        if dependent_domain == prerequisite_domain:
            return DependencyType.REQUIRES
        return self._relationships.get(
            (dependent_domain, prerequisite_domain), DependencyType.REQUIRES
        )

    def all_prerequisites(self, skill_id: str) -> tuple[tuple[str, ...], tuple[str, ...]]:
        """
        Get all prerequisite skills for a skill, combining:
        1. Direct skill-to-skill prerequisites
        2. Tier-filtered skills from prerequisite sub-areas

        Only same-or-lower tier skills of a prerequisite sub-area count:
        a tier 3 skill in d5 requires tier 1-3 skills from its prerequisite sub-areas.

        Returns:
            Tuple of (direct, structural) skill id tuples
        """
        skill = self.taxonomy.skill(skill_id)

        structural: list[str] = []
        for prereq_sa in self.sub_area_prerequisites(skill.sub_area_id):
            for candidate_id in self.taxonomy.skill_ids_in_sub_area(prereq_sa):
                if self.taxonomy.tier_of(candidate_id) <= skill.tier:
                    structural.append(candidate_id)

        return self.direct_prerequisites(skill_id), tuple(structural)

    def domain_chord_matrix(self) -> DomainChordMatrix:
        """Count cross-domain sub-area dependency links between every domain pair."""
        domain_ids = self.taxonomy.domain_ids()
        index = {domain_id: i for i, domain_id in enumerate(domain_ids)}
        matrix = [[0] * len(domain_ids) for _ in domain_ids]

        for sa_id, prereqs in self._sub_area_prereqs.items():
            from_domain = domain_from_id(sa_id)
            for prereq_sa in prereqs:
                to_domain = domain_from_id(prereq_sa)
                if from_domain == to_domain:
                    continue
                matrix[index[from_domain]][index[to_domain]] += 1

        return DomainChordMatrix(
            domain_ids=domain_ids,
            matrix=tuple(tuple(row) for row in matrix),
        )


# =============================================================================
# Construction helpers
# =============================================================================


def _validate(taxonomy: Taxonomy, data: PrerequisiteData) -> None:
    """Check the graph is closed over the taxonomy. Raises TaxonomyIntegrityError."""
    problems: list[str] = []

    for skill_id, prereqs in data.skill_prerequisites.items():
        if not taxonomy.has_skill(skill_id):
            problems.append(f"unknown dependent skill {skill_id}")
        if not prereqs:
            problems.append(f"skill {skill_id} has an empty prerequisite list")
        if len(set(prereqs)) != len(prereqs):
            problems.append(f"duplicate prerequisites listed for {skill_id}")
        for prereq_id in prereqs:
            if prereq_id == skill_id:
                problems.append(f"skill {skill_id} lists itself as a prerequisite")
            elif not taxonomy.has_skill(prereq_id):
                problems.append(f"unknown prerequisite skill {prereq_id} (required by {skill_id})")

    for sa_id, prereqs in data.sub_area_prerequisites.items():
        if not taxonomy.has_sub_area(sa_id):
            problems.append(f"unknown dependent sub-area {sa_id}")
        for prereq_sa in prereqs:
            if prereq_sa == sa_id:
                problems.append(f"sub-area {sa_id} lists itself as a prerequisite")
            elif not taxonomy.has_sub_area(prereq_sa):
                problems.append(f"unknown prerequisite sub-area {prereq_sa} (required by {sa_id})")

    valid_types = {t.value for t in DependencyType}
    for rel in data.domain_relationships:
        for domain_id in (rel.dependent, rel.prerequisite):
            if not taxonomy.has_domain(domain_id):
                problems.append(f"unknown domain {domain_id} in relationship")
        if rel.type not in valid_types:
            problems.append(
                f"relationship {rel.dependent}→{rel.prerequisite} has invalid type {rel.type!r}"
            )

    if problems:
        logger.error(f"Prerequisite graph failed integrity checks: {problems}")
        raise TaxonomyIntegrityError(problems)


def _reverse_index(edges: Mapping[str, tuple[str, ...]]) -> dict[str, tuple[str, ...]]:
    """Build prerequisite → dependents from dependent → prerequisites."""
    reverse: dict[str, list[str]] = {}
    for dependent, prereqs in edges.items():
        for prereq in prereqs:
            reverse.setdefault(prereq, []).append(dependent)
    return {prereq: tuple(dependents) for prereq, dependents in reverse.items()}


def _transitive_closures(reverse: Mapping[str, tuple[str, ...]]) -> dict[str, frozenset[str]]:
    """
    Downstream closure for every prerequisite skill.

    Iterative work-list with a per-traversal visited set, so cycles terminate.
    Closures already completed are merged instead of re-walked.
    """
    closures: dict[str, frozenset[str]] = {}

    for skill_id in reverse:
        reached: set[str] = set()
        work = list(reverse[skill_id])
        while work:
            node = work.pop()
            if node in reached:
                continue
            reached.add(node)
            completed = closures.get(node)
            if completed is not None:
                reached.update(completed)
                continue
            work.extend(reverse.get(node, ()))
        closures[skill_id] = frozenset(reached)

    return closures


# =============================================================================
# Loading
# =============================================================================


def load_prerequisite_data(path: Path | str | None = None) -> PrerequisiteData:
    """
    Load and parse the prerequisite graph data asset.

    Raises:
        TaxonomyIntegrityError: If the file cannot be read or parsed
    """
    source = Path(path) if path else PREREQUISITES_FILE
    try:
        return PrerequisiteData.model_validate_json(source.read_bytes())
    except (OSError, ValidationError) as e:
        logger.error(f"Failed to load prerequisite graph from {source}: {e}")
        raise TaxonomyIntegrityError([f"cannot load prerequisite graph from {source}: {e}"]) from e


@lru_cache(maxsize=1)
def get_prerequisite_graph() -> PrerequisiteGraph:
    """Get the process-wide prerequisite graph, built on first use."""
    settings = get_settings()
    graph = PrerequisiteGraph(get_taxonomy(), load_prerequisite_data(settings.PREREQUISITES_PATH))
    logger.info(
        f"Built prerequisite graph: {len(graph.skills_with_prerequisites())} dependent skills, "
        f"{len(graph.prerequisite_skills())} prerequisite skills, {graph.edge_count()} edges"
    )
    return graph


def resolve_graph(graph: PrerequisiteGraph | None) -> PrerequisiteGraph:
    """Use the given graph, or the process-wide one."""
    return graph if graph is not None else get_prerequisite_graph()
