"""Developmental dependency and ceiling engine.

Pure functions of (static prerequisite graph, assessment snapshot):
- Coupling strength of every prerequisite edge
- Per-skill ceilings and constrained (fragile) skills
- Influence of prerequisite skills on their dependents
- Readiness from direct + structural prerequisites
- Start Here priority for unassessed skills

Usage:
    from skillcascade.core.influence import constrained_skills, start_here_priority

    assessments = {"d1-sa1-sg1-s1": 0, "d2-sa1-sg2-s1": 2}
    fragile = constrained_skills(assessments)
    next_up = start_here_priority(assessments)[:10]
"""

from skillcascade.core.influence.ceilings import (
    all_ceilings,
    ceiling_coverage,
    ceiling_from_prereq,
    constrained_skills,
    max_gap,
    skill_ceiling,
)
from skillcascade.core.influence.coupling import coupling_strength
from skillcascade.core.influence.influence import skill_influence
from skillcascade.core.influence.levels import AssessmentLevel, Assessments
from skillcascade.core.influence.priority import start_here_priority
from skillcascade.core.influence.readiness import (
    cross_domain_bottlenecks,
    skill_readiness,
    sub_area_tier_breakdown,
)
from skillcascade.core.influence.types import (
    Bottleneck,
    CeilingCoverage,
    ConstrainedSkill,
    ConstrainingPrereq,
    InfluenceRecord,
    PriorityEntry,
    SkillCeiling,
    SkillReadiness,
    TierBreakdown,
    TierSkill,
)

__all__ = [
    "coupling_strength",
    "max_gap",
    "ceiling_from_prereq",
    "skill_ceiling",
    "all_ceilings",
    "constrained_skills",
    "ceiling_coverage",
    "skill_influence",
    "start_here_priority",
    "skill_readiness",
    "cross_domain_bottlenecks",
    "sub_area_tier_breakdown",
    "AssessmentLevel",
    "Assessments",
    "Bottleneck",
    "CeilingCoverage",
    "ConstrainedSkill",
    "ConstrainingPrereq",
    "InfluenceRecord",
    "PriorityEntry",
    "SkillCeiling",
    "SkillReadiness",
    "TierBreakdown",
    "TierSkill",
]
