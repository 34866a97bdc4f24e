"""Start Here priority: which unassessed skill to rate next.

Prioritizes skills that are most informative to rate first:
  - High downstream influence (many skills depend on this)
  - Lower developmental tier (foundation first)
  - Skills in fully-unassessed domains (coverage)
  - Junction points (both prerequisite and dependent)
Skills whose own ceiling is already ≤ 1 are demoted.
"""

from skillcascade.core.influence.ceilings import all_ceilings
from skillcascade.core.influence.levels import Assessments, is_assessed
from skillcascade.core.influence.types import PriorityEntry
from skillcascade.core.logging import get_logger
from skillcascade.core.prerequisite_graph import PrerequisiteGraph, resolve_graph

logger = get_logger(__name__)

# Score weights
DOWNSTREAM_WEIGHT = 3
DIRECT_DOWNSTREAM_WEIGHT = 2
TIER_WEIGHT = 2
TIER_BASE = 6
UNASSESSED_DOMAIN_BONUS = 5
JUNCTION_BONUS = 3
PREREQ_BONUS = 2
CONSTRAINED_PENALTY = 8

HIGH_INFLUENCE_DOWNSTREAM = 5
FOUNDATION_MAX_TIER = 2
HEAVILY_CONSTRAINED_CEILING = 1

REASON_HIGH_INFLUENCE = "High influence — many skills depend on this"
REASON_FOUNDATION_SKILL = "Foundation skill — sets ceiling for higher skills"
REASON_FIRST_IN_DOMAIN = "First skill in this domain — establishes coverage"
REASON_JUNCTION = "Junction point — both receives and sends influence"
REASON_PREREQUISITE = "Prerequisite — affects downstream skill ceilings"
REASON_FOUNDATION_TIER = "Foundation tier — early developmental skill"
REASON_FILLS_COVERAGE = "Fills assessment coverage"


def _reason(
    downstream: int,
    tier: int,
    is_prereq: bool,
    is_junction: bool,
    domain_unassessed: bool,
) -> str:
    if downstream >= HIGH_INFLUENCE_DOWNSTREAM:
        return REASON_HIGH_INFLUENCE
    if tier <= FOUNDATION_MAX_TIER and is_prereq:
        return REASON_FOUNDATION_SKILL
    if domain_unassessed:
        return REASON_FIRST_IN_DOMAIN
    if is_junction:
        return REASON_JUNCTION
    if is_prereq:
        return REASON_PREREQUISITE
    if tier <= FOUNDATION_MAX_TIER:
        return REASON_FOUNDATION_TIER
    return REASON_FILLS_COVERAGE


def start_here_priority(
    assessments: Assessments,
    graph: PrerequisiteGraph | None = None,
) -> list[PriorityEntry]:
    """
    Get the priority-ordered list of unassessed skills.

    Args:
        assessments: skill_id -> level (0-3); missing or None = unassessed
        graph: Prerequisite graph (defaults to the process-wide graph)

    Returns:
        PriorityEntry list sorted by priority, highest first (taxonomy order on ties)
    """
    graph = resolve_graph(graph)
    taxonomy = graph.taxonomy
    ceilings = all_ceilings(assessments, graph=graph)

    assessed_domains = {
        domain_id
        for domain_id in taxonomy.domain_ids()
        if any(is_assessed(assessments, s) for s in taxonomy.skill_ids_in_domain(domain_id))
    }

    results: list[PriorityEntry] = []

    for skill in taxonomy.skills():
        if is_assessed(assessments, skill.id):
            continue

        downstream = graph.transitive_downstream(skill.id)
        direct_down = len(graph.dependents(skill.id))
        is_prereq = direct_down > 0
        is_dependent = graph.has_prerequisites(skill.id)
        is_junction = is_prereq and is_dependent
        domain_unassessed = skill.domain_id not in assessed_domains

        ceiling_data = ceilings.get(skill.id)
        heavily_constrained = (
            ceiling_data is not None and ceiling_data.ceiling <= HEAVILY_CONSTRAINED_CEILING
        )

        priority = (
            downstream * DOWNSTREAM_WEIGHT
            + direct_down * DIRECT_DOWNSTREAM_WEIGHT
            + (TIER_BASE - skill.tier) * TIER_WEIGHT
        )
        if domain_unassessed:
            priority += UNASSESSED_DOMAIN_BONUS
        if is_junction:
            priority += JUNCTION_BONUS
        if is_prereq:
            priority += PREREQ_BONUS
        if heavily_constrained:
            priority -= CONSTRAINED_PENALTY

        domain = taxonomy.domain(skill.domain_id)
        sub_area = taxonomy.sub_area(skill.sub_area_id)
        results.append(
            PriorityEntry(
                skill_id=skill.id,
                skill_name=skill.name,
                domain_id=domain.id,
                domain_name=domain.name,
                sub_area_id=sub_area.id,
                sub_area_name=sub_area.name,
                tier=skill.tier,
                priority=priority,
                reason=_reason(downstream, skill.tier, is_prereq, is_junction, domain_unassessed),
                downstream_count=downstream,
            )
        )

    results.sort(key=lambda entry: entry.priority, reverse=True)

    logger.debug(f"Ranked {len(results)} unassessed skills")
    return results
