"""Skill readiness from direct and structural prerequisites.

A skill is ready when every prerequisite in the union of
  - its direct skill-to-skill prerequisites, and
  - the tier-filtered skills of its prerequisite sub-areas
is rated Developing (2) or above. Unassessed prerequisites are unmet.
"""

from skillcascade.core.influence.levels import (
    MET_THRESHOLD,
    Assessments,
    assessed_level,
    effective_level,
)
from skillcascade.core.influence.types import (
    Bottleneck,
    SkillReadiness,
    TierBreakdown,
    TierSkill,
)
from skillcascade.core.logging import get_logger
from skillcascade.core.prerequisite_graph import PrerequisiteGraph, resolve_graph

logger = get_logger(__name__)


def _is_met(assessments: Assessments, skill_id: str) -> bool:
    level = assessed_level(assessments, skill_id)
    return level is not None and level >= MET_THRESHOLD


def skill_readiness(
    skill_id: str,
    assessments: Assessments,
    graph: PrerequisiteGraph | None = None,
) -> SkillReadiness:
    """
    Compute readiness for a skill based on its prerequisites.

    Args:
        skill_id: Target skill id
        assessments: skill_id -> level (0-3); missing or None = unassessed
        graph: Prerequisite graph (defaults to the process-wide graph)

    Returns:
        SkillReadiness with:
        - ready: all prerequisites at Developing or above
        - readiness: fraction of prerequisites at Developing or above
        - unmet_direct: weak direct prerequisites
        - unmet_structural: weak structural prerequisites not already direct

    Raises:
        UnknownSkillError: If the skill is not in the taxonomy
    """
    graph = resolve_graph(graph)
    direct, structural = graph.all_prerequisites(skill_id)
    all_prereqs = list(dict.fromkeys(direct + structural))

    if not all_prereqs:
        return SkillReadiness(ready=True, readiness=1.0, prereq_count=0)

    unmet_direct = [p for p in direct if not _is_met(assessments, p)]
    unmet_structural = [
        p for p in structural if not _is_met(assessments, p) and p not in direct
    ]

    unmet = set(unmet_direct) | set(unmet_structural)
    met_count = len(all_prereqs) - len(unmet)

    return SkillReadiness(
        ready=not unmet,
        readiness=met_count / len(all_prereqs),
        unmet_direct=tuple(unmet_direct),
        unmet_structural=tuple(unmet_structural),
        prereq_count=len(all_prereqs),
    )


def cross_domain_bottlenecks(
    assessments: Assessments,
    graph: PrerequisiteGraph | None = None,
) -> list[Bottleneck]:
    """
    Find weak prerequisite skills that are blocking the most other skills.

    Returns:
        Bottleneck list sorted by blocked_count, highest first
    """
    graph = resolve_graph(graph)
    block_count: dict[str, int] = {}

    for skill in graph.taxonomy.skills():
        readiness = skill_readiness(skill.id, assessments, graph=graph)
        for prereq_id in readiness.unmet_direct + readiness.unmet_structural:
            block_count[prereq_id] = block_count.get(prereq_id, 0) + 1

    bottlenecks = []
    for skill_id, blocked in block_count.items():
        skill = graph.taxonomy.skill(skill_id)
        bottlenecks.append(
            Bottleneck(
                skill_id=skill_id,
                skill_name=skill.name,
                tier=skill.tier,
                domain_id=skill.domain_id,
                blocked_count=blocked,
                current_level=effective_level(assessments, skill_id),
            )
        )

    bottlenecks.sort(key=lambda b: b.blocked_count, reverse=True)

    logger.debug(f"Found {len(bottlenecks)} bottleneck skills")
    return bottlenecks


def sub_area_tier_breakdown(
    sub_area_id: str,
    assessments: Assessments,
    graph: PrerequisiteGraph | None = None,
) -> dict[int, TierBreakdown]:
    """
    Tier distribution of a sub-area: per tier, how many skills exist and how
    many are at Developing or above (unassessed counts as 0).

    Returns:
        Map of tier -> TierBreakdown in ascending tier order; empty for an
        unknown sub-area
    """
    graph = resolve_graph(graph)
    taxonomy = graph.taxonomy
    if not taxonomy.has_sub_area(sub_area_id):
        return {}

    by_tier: dict[int, list[TierSkill]] = {}
    for skill_id in taxonomy.skill_ids_in_sub_area(sub_area_id):
        skill = taxonomy.skill(skill_id)
        by_tier.setdefault(skill.tier, []).append(
            TierSkill(
                id=skill.id,
                name=skill.name,
                level=effective_level(assessments, skill.id),
                tier=skill.tier,
            )
        )

    return {
        tier: TierBreakdown(
            total=len(skills),
            met=sum(1 for s in skills if s.level >= MET_THRESHOLD),
            skills=tuple(skills),
        )
        for tier, skills in sorted(by_tier.items())
    }
