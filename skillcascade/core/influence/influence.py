"""Influence scoring for prerequisite skills.

Influence = sum of coupling strengths to direct dependents WHERE raising the
prerequisite by one level would raise the dependent's ceiling. It measures
the potential gain from improving a skill, so a skill already at Solid has
no influence left to offer.
"""

from skillcascade.core.influence.ceilings import ceiling_from_prereq
from skillcascade.core.influence.coupling import coupling_strength
from skillcascade.core.influence.levels import (
    MAX_LEVEL,
    Assessments,
    assessed_level,
    effective_level,
)
from skillcascade.core.influence.types import InfluenceRecord
from skillcascade.core.logging import get_logger
from skillcascade.core.prerequisite_graph import PrerequisiteGraph, resolve_graph

logger = get_logger(__name__)


def skill_influence(
    assessments: Assessments,
    graph: PrerequisiteGraph | None = None,
) -> dict[str, InfluenceRecord]:
    """
    Compute influence for every skill that is a prerequisite of another skill.

    Args:
        assessments: skill_id -> level (0-3); missing or None = unassessed
        graph: Prerequisite graph (defaults to the process-wide graph)

    Returns:
        Map of skill_id -> InfluenceRecord, in reverse-index order
    """
    graph = resolve_graph(graph)
    influence: dict[str, InfluenceRecord] = {}

    for skill_id in graph.prerequisite_skills():
        current = effective_level(assessments, skill_id)
        hypothetical = min(MAX_LEVEL, current + 1)
        dependents = graph.dependents(skill_id)

        score = 0.0
        constrained_downstream = 0
        # dict keeps first-seen order for deterministic output
        affected_domains: dict[str, None] = {}

        for dependent_id in dependents:
            strength = coupling_strength(dependent_id, skill_id, graph=graph)
            current_ceiling = ceiling_from_prereq(current, strength)
            new_ceiling = ceiling_from_prereq(hypothetical, strength)

            if new_ceiling > current_ceiling:
                score += strength
                affected_domains[graph.taxonomy.skill(dependent_id).domain_id] = None

            dependent_level = assessed_level(assessments, dependent_id)
            if dependent_level is not None and dependent_level > current_ceiling:
                constrained_downstream += 1

        influence[skill_id] = InfluenceRecord(
            influence_score=round(score, 2),
            direct_downstream=len(dependents),
            transitive_downstream=graph.transitive_downstream(skill_id),
            constrained_downstream=constrained_downstream,
            affected_domains=tuple(affected_domains),
        )

    logger.debug(f"Computed influence for {len(influence)} prerequisite skills")
    return influence
