"""Skill ceiling model.

Each prerequisite imposes a ceiling on its dependent skill. The ceiling
depends on the prerequisite's current level AND the coupling strength of the
edge. A skill's ceiling is the minimum across its direct prerequisites: the
single weakest link gates the skill.

Unassessed prerequisites count as level 0 (conservative). Skills without
prerequisites have no ceiling entry and are implicitly unconstrained (3).
"""

import math

from skillcascade.core.influence.coupling import coupling_strength
from skillcascade.core.influence.levels import (
    MAX_LEVEL,
    Assessments,
    assessed_level,
)
from skillcascade.core.influence.types import (
    CeilingCoverage,
    ConstrainedSkill,
    ConstrainingPrereq,
    SkillCeiling,
)
from skillcascade.core.logging import get_logger
from skillcascade.core.prerequisite_graph import PrerequisiteGraph, resolve_graph

logger = get_logger(__name__)


def max_gap(strength: float) -> int:
    """
    Maximum level gap allowed between dependent and prerequisite.

    round(1 + 2 × (1 − strength)), halves rounding up: tight coupling (> 0.75)
    allows 1 level, moderate 2, loose (≤ 0.25) 3.
    """
    return math.floor(1 + 2 * (1 - strength) + 0.5)


def ceiling_from_prereq(prereq_level: int | None, strength: float) -> int:
    """Ceiling imposed on a dependent by a single prerequisite (None counts as 0)."""
    level = 0 if prereq_level is None else prereq_level
    return min(MAX_LEVEL, level + max_gap(strength))


def _compute_ceiling(
    skill_id: str,
    prereq_ids: tuple[str, ...],
    assessments: Assessments,
    graph: PrerequisiteGraph,
) -> SkillCeiling:
    ceiling = MAX_LEVEL
    constraining: list[ConstrainingPrereq] = []

    for prereq_id in prereq_ids:
        prereq_level = assessed_level(assessments, prereq_id)
        strength = coupling_strength(skill_id, prereq_id, graph=graph)
        imposed = ceiling_from_prereq(prereq_level, strength)
        constraining.append(
            ConstrainingPrereq(
                id=prereq_id,
                level=prereq_level,
                strength=strength,
                imposed_ceiling=imposed,
            )
        )
        ceiling = min(ceiling, imposed)

    # Most constraining first; stable for ties
    constraining.sort(key=lambda p: p.imposed_ceiling)

    return SkillCeiling(ceiling=ceiling, constraining_prereqs=tuple(constraining))


def skill_ceiling(
    skill_id: str,
    assessments: Assessments,
    graph: PrerequisiteGraph | None = None,
) -> SkillCeiling | None:
    """
    Get the ceiling for a single skill.

    Returns:
        SkillCeiling, or None if the skill has no prerequisites

    Raises:
        UnknownSkillError: If the skill is not in the taxonomy
    """
    graph = resolve_graph(graph)
    graph.taxonomy.skill(skill_id)

    prereq_ids = graph.direct_prerequisites(skill_id)
    if not prereq_ids:
        return None
    return _compute_ceiling(skill_id, prereq_ids, assessments, graph)


def all_ceilings(
    assessments: Assessments,
    graph: PrerequisiteGraph | None = None,
) -> dict[str, SkillCeiling]:
    """
    Compute the effective ceiling for every skill that has prerequisites.

    Args:
        assessments: skill_id -> level (0-3); missing or None = unassessed

    Returns:
        Map of skill_id -> SkillCeiling, in prerequisite-data order
    """
    graph = resolve_graph(graph)
    return {
        skill_id: _compute_ceiling(skill_id, graph.direct_prerequisites(skill_id), assessments, graph)
        for skill_id in graph.skills_with_prerequisites()
    }


def constrained_skills(
    assessments: Assessments,
    graph: PrerequisiteGraph | None = None,
) -> list[ConstrainedSkill]:
    """
    Find skills rated above their ceiling (fragile / possibly over-taught).

    These skills may regress without prerequisite support. Unassessed skills
    never appear.

    Returns:
        ConstrainedSkill list sorted by gap, highest first
    """
    graph = resolve_graph(graph)
    constrained: list[ConstrainedSkill] = []

    for skill_id, data in all_ceilings(assessments, graph=graph).items():
        level = assessed_level(assessments, skill_id)
        if level is None or level <= data.ceiling:
            continue
        constrained.append(
            ConstrainedSkill(
                skill_id=skill_id,
                level=level,
                ceiling=data.ceiling,
                gap=level - data.ceiling,
                domain_id=graph.taxonomy.skill(skill_id).domain_id,
                constraining_prereqs=tuple(
                    p for p in data.constraining_prereqs if p.imposed_ceiling < level
                ),
            )
        )

    constrained.sort(key=lambda c: c.gap, reverse=True)

    logger.debug(f"Found {len(constrained)} constrained skills")
    return constrained


def ceiling_coverage(
    assessments: Assessments,
    graph: PrerequisiteGraph | None = None,
) -> CeilingCoverage:
    """
    What fraction of skills have known ceilings.

    A ceiling is known when at least one direct prerequisite has been
    assessed. Skills without prerequisites are known by definition (ceiling 3).
    """
    graph = resolve_graph(graph)

    known_with_prereqs = sum(
        1
        for skill_id in graph.skills_with_prerequisites()
        if any(assessed_level(assessments, p) is not None for p in graph.direct_prerequisites(skill_id))
    )
    total_skills = len(graph.taxonomy)
    without_prereqs = total_skills - len(graph.skills_with_prerequisites())
    known = known_with_prereqs + without_prereqs

    return CeilingCoverage(
        known_ceilings=known,
        total_skills=total_skills,
        coverage=known / total_skills if total_skills > 0 else 0.0,
    )
