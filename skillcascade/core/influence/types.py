"""Pydantic models for the ceiling and influence engine."""

from pydantic import BaseModel, ConfigDict, Field


class _Result(BaseModel):
    """Base for result records: immutable once returned."""

    model_config = ConfigDict(frozen=True)


# =============================================================================
# Ceiling model
# =============================================================================


class ConstrainingPrereq(_Result):
    """Ceiling imposed on a dependent skill by one direct prerequisite."""

    id: str = Field(..., description="Prerequisite skill id")
    level: int | None = Field(None, description="Assessed level of the prerequisite (None if unassessed)")
    strength: float = Field(..., ge=0.25, le=0.95, description="Coupling strength of the edge")
    imposed_ceiling: int = Field(..., ge=0, le=3, description="Ceiling this prerequisite imposes")


class SkillCeiling(_Result):
    """Effective ceiling of a skill with direct prerequisites."""

    ceiling: int = Field(..., ge=0, le=3, description="Minimum imposed ceiling across prerequisites")
    constraining_prereqs: tuple[ConstrainingPrereq, ...] = Field(
        default=(), description="All prerequisites, tightest constraint first"
    )


class ConstrainedSkill(_Result):
    """A skill rated above its computed ceiling (fragile)."""

    skill_id: str
    level: int
    ceiling: int = Field(..., ge=0, le=3)
    gap: int = Field(..., ge=1, description="level - ceiling")
    domain_id: str
    constraining_prereqs: tuple[ConstrainingPrereq, ...] = Field(
        default=(), description="Prerequisites whose imposed ceiling is below the level"
    )


class CeilingCoverage(_Result):
    known_ceilings: int = Field(..., ge=0, description="Skills whose ceiling is known")
    total_skills: int = Field(..., ge=0)
    coverage: float = Field(..., ge=0, le=1, description="known_ceilings / total_skills")


# =============================================================================
# Influence and prioritization
# =============================================================================


class InfluenceRecord(_Result):
    """Downstream influence of a prerequisite skill."""

    influence_score: float = Field(
        ..., ge=0, description="Sum of coupling strengths to dependents whose ceiling would rise"
    )
    direct_downstream: int = Field(..., ge=0)
    transitive_downstream: int = Field(..., ge=0)
    constrained_downstream: int = Field(
        ..., ge=0, description="Direct dependents already rated above this prerequisite's ceiling"
    )
    affected_domains: tuple[str, ...] = ()


class PriorityEntry(_Result):
    """An unassessed skill ranked for Start Here assessment."""

    skill_id: str
    skill_name: str
    domain_id: str
    domain_name: str
    sub_area_id: str
    sub_area_name: str
    tier: int = Field(..., ge=1, le=5)
    priority: int
    reason: str
    downstream_count: int = Field(..., ge=0)


# =============================================================================
# Readiness
# =============================================================================


class SkillReadiness(_Result):
    """Readiness of a skill from direct + tier-filtered structural prerequisites."""

    ready: bool
    readiness: float = Field(..., ge=0, le=1, description="Fraction of prerequisites at Developing or above")
    unmet_direct: tuple[str, ...] = ()
    unmet_structural: tuple[str, ...] = ()
    prereq_count: int = Field(..., ge=0)


class Bottleneck(_Result):
    """A weak prerequisite skill and how many skills it is blocking."""

    skill_id: str
    skill_name: str
    tier: int
    domain_id: str
    blocked_count: int = Field(..., ge=1)
    current_level: int


class TierSkill(_Result):
    id: str
    name: str
    level: int
    tier: int


class TierBreakdown(_Result):
    total: int = 0
    met: int = 0
    skills: tuple[TierSkill, ...] = ()
