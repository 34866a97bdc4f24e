"""Coupling strength between a dependent skill and one of its prerequisites.

Multi-factor clinical model:
  1. Domain relationship type (requires vs supports)
  2. Tier proximity (same tier = tighter developmental coupling)
  3. Prerequisite exclusivity (sole prerequisite = more critical)
  4. Sub-area proximity (conceptually closer = tighter)
  5. Foundation bonus for cross-domain D1 prerequisites
  6. Clinical pattern matching (specific developmental relationships)

Returns a value in [0.25, 0.95]. Ceiling implications:
    strength > 0.75       → max gap 1 (dependent at most 1 level above prereq)
    0.25 < strength ≤ 0.75 → max gap 2
    strength ≤ 0.25       → max gap 3 (effectively unconstrained)
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from skillcascade.core.prerequisite_graph import (
    DependencyType,
    PrerequisiteGraph,
    resolve_graph,
)
from skillcascade.core.taxonomy import FOUNDATION_DOMAIN_ID

MIN_STRENGTH = 0.25
MAX_STRENGTH = 0.95

BASE_REQUIRES = 0.65
BASE_SUPPORTS = 0.40

# =============================================================================
# Clinical coupling overrides
# =============================================================================

# Hand-tuned strengths for edges the heuristic misjudges.
# Keyed by (dependent_id, prerequisite_id); returned verbatim.
COUPLING_OVERRIDES: dict[tuple[str, str], float] = {
    # Connecting sensations to labels ← each interoception channel.
    # Labeling requires detection.
    ("d2-sa1-sg2-s1", "d1-sa1-sg1-s1"): 0.95,  # Heart rate: most accessible signal
    ("d2-sa1-sg2-s1", "d1-sa1-sg1-s2"): 0.90,  # Breathing
    ("d2-sa1-sg2-s1", "d1-sa1-sg1-s3"): 0.85,  # Muscle tension
    ("d2-sa1-sg2-s1", "d1-sa1-sg1-s4"): 0.80,  # Temperature: least central to labeling
    # Noticing strain ← interoception: expressing discomfort is communicating body signals
    ("d5-sa2-sg1-s1", "d1-sa1-sg1-s1"): 0.90,
    ("d5-sa2-sg1-s1", "d1-sa1-sg1-s2"): 0.85,
    ("d5-sa2-sg1-s1", "d1-sa1-sg2-s1"): 0.80,
    # Continuing despite boredom ← allowing discomfort: persistence is tolerance applied to task
    ("d3-sa2-sg2-s1", "d1-sa4-sg3-s1"): 0.90,
    # Recognizing others have separate minds ← distinguishing own emotions
    ("d6-sa1-sg1-s1", "d2-sa1-sg1-s1"): 0.90,
    ("d6-sa1-sg1-s1", "d2-sa1-sg2-s1"): 0.85,
}


# =============================================================================
# Clinical pattern bonuses
# =============================================================================


@dataclass(frozen=True)
class EdgeContext:
    """Hierarchy facts about a (dependent, prerequisite) edge."""

    dependent_domain: str
    prerequisite_domain: str
    dependent_sub_area: str
    prerequisite_sub_area: str

    @property
    def same_domain(self) -> bool:
        return self.dependent_domain == self.prerequisite_domain


@dataclass(frozen=True)
class PatternBonus:
    """A named developmental pattern that tightens matching edges."""

    id: str
    bonus: float
    reason: str
    check: Callable[[EdgeContext], bool]


_SUB_AREA_NUMBER_RE = re.compile(r"-sa(\d+)")


def _sub_area_number(sub_area_id: str) -> int:
    match = _SUB_AREA_NUMBER_RE.search(sub_area_id)
    return int(match.group(1)) if match else 0


def _adjacent_progression(ctx: EdgeContext) -> bool:
    if not ctx.same_domain:
        return False
    dep_num = _sub_area_number(ctx.dependent_sub_area)
    prereq_num = _sub_area_number(ctx.prerequisite_sub_area)
    return dep_num > 0 and prereq_num > 0 and dep_num == prereq_num + 1


PATTERN_BONUSES: list[PatternBonus] = [
    PatternBonus(
        id="interoception_to_naming",
        bonus=0.10,
        reason="Detecting sensations → labeling feelings is definitional",
        check=lambda ctx: (
            ctx.prerequisite_sub_area == "d1-sa1" and ctx.dependent_sub_area == "d2-sa1"
        ),
    ),
    PatternBonus(
        id="interoception_to_expressing_discomfort",
        bonus=0.08,
        reason="Noticing strain → communicating strain",
        check=lambda ctx: (
            ctx.prerequisite_sub_area == "d1-sa1" and ctx.dependent_sub_area == "d5-sa2"
        ),
    ),
    PatternBonus(
        id="tolerance_to_persistence_flexibility",
        bonus=0.06,
        reason="Discomfort tolerance is the core regulatory gate for persistence and flexibility",
        check=lambda ctx: (
            ctx.prerequisite_sub_area == "d1-sa4"
            and ctx.dependent_sub_area in ("d3-sa2", "d3-sa3")
        ),
    ),
    PatternBonus(
        id="self_awareness_to_perspective_taking",
        bonus=0.06,
        reason="Self-model → other-model",
        check=lambda ctx: ctx.prerequisite_domain == "d2" and ctx.dependent_sub_area == "d6-sa1",
    ),
    PatternBonus(
        id="naming_to_self_talk",
        bonus=0.08,
        reason="Emotional vocabulary drives self-narrative",
        check=lambda ctx: (
            ctx.prerequisite_sub_area == "d2-sa1" and ctx.dependent_sub_area == "d7-sa1"
        ),
    ),
    PatternBonus(
        id="self_monitoring_to_context_adaptation",
        bonus=0.06,
        reason="Monitoring enables adjustment",
        check=lambda ctx: (
            ctx.prerequisite_sub_area == "d3-sa5" and ctx.dependent_sub_area == "d4-sa4"
        ),
    ),
    PatternBonus(
        id="calming_cross_domain",
        bonus=0.03,
        reason="Calming up/down feeds downstream regulation needs",
        check=lambda ctx: (
            ctx.prerequisite_sub_area in ("d1-sa3", "d1-sa2") and not ctx.same_domain
        ),
    ),
    PatternBonus(
        id="trigger_awareness_cross_domain",
        bonus=0.04,
        reason="Trigger awareness → emotional anticipation across domains",
        check=lambda ctx: ctx.prerequisite_sub_area == "d2-sa2" and ctx.dependent_domain != "d2",
    ),
    PatternBonus(
        id="adjacent_sub_area_progression",
        bonus=0.04,
        reason="Within-domain progression to the next sub-area",
        check=_adjacent_progression,
    ),
]


# =============================================================================
# Heuristic
# =============================================================================


def _tier_proximity(tier_gap: int) -> float:
    if tier_gap == 0:
        return 0.08
    if tier_gap == 1:
        return 0.04
    if tier_gap >= 3:
        return -0.04
    return 0.0


def _exclusivity(prereq_count: int) -> float:
    if prereq_count == 1:
        return 0.10
    if prereq_count == 2:
        return 0.04
    if prereq_count >= 5:
        return -0.03
    return 0.0


def coupling_strength(
    dependent_id: str,
    prerequisite_id: str,
    graph: PrerequisiteGraph | None = None,
) -> float:
    """
    Compute how tightly a dependent skill is coupled to its prerequisite.

    Explicit overrides win; otherwise the additive heuristic is clamped to
    [0.25, 0.95] and rounded to two decimals.

    Args:
        dependent_id: Dependent skill id
        prerequisite_id: Prerequisite skill id
        graph: Prerequisite graph (defaults to the process-wide graph)

    Returns:
        Coupling strength in [0.25, 0.95]

    Raises:
        UnknownSkillError: If either id is not in the taxonomy
    """
    override = COUPLING_OVERRIDES.get((dependent_id, prerequisite_id))
    if override is not None:
        return override

    graph = resolve_graph(graph)
    dependent = graph.taxonomy.skill(dependent_id)
    prerequisite = graph.taxonomy.skill(prerequisite_id)

    ctx = EdgeContext(
        dependent_domain=dependent.domain_id,
        prerequisite_domain=prerequisite.domain_id,
        dependent_sub_area=dependent.sub_area_id,
        prerequisite_sub_area=prerequisite.sub_area_id,
    )

    relationship = graph.relationship(ctx.dependent_domain, ctx.prerequisite_domain)
    s = BASE_REQUIRES if relationship == DependencyType.REQUIRES else BASE_SUPPORTS

    s += _tier_proximity(abs(dependent.tier - prerequisite.tier))
    s += _exclusivity(len(graph.direct_prerequisites(dependent_id)))

    if ctx.dependent_sub_area == ctx.prerequisite_sub_area:
        s += 0.08
    elif ctx.same_domain:
        s += 0.04

    if ctx.prerequisite_domain == FOUNDATION_DOMAIN_ID and not ctx.same_domain:
        s += 0.04

    for pattern in PATTERN_BONUSES:
        if pattern.check(ctx):
            s += pattern.bonus

    return round(max(MIN_STRENGTH, min(MAX_STRENGTH, s)), 2)
