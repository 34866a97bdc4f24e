"""Pydantic models for assessment snapshots and engine API responses."""

from typing import Annotated, Optional

from pydantic import BaseModel, Field, field_validator

from skillcascade.core.influence.types import SkillCeiling
from skillcascade.core.prerequisite_graph import DependencyType
from skillcascade.core.taxonomy import get_taxonomy

# Strict so that booleans, floats and numeric strings are rejected
LevelValue = Annotated[int, Field(ge=0, le=3, strict=True)]


class AssessmentSnapshot(BaseModel):
    """An externally supplied assessment snapshot.

    Keys are skill ids; values are levels 0-3, or null for not yet assessed.
    Unknown skill ids are rejected so they never reach the ceiling math.
    """

    assessments: dict[str, Optional[LevelValue]] = Field(
        default_factory=dict, description="skill_id -> level (0-3) or null"
    )

    @field_validator("assessments")
    @classmethod
    def _known_skills_only(cls, value: dict[str, Optional[int]]) -> dict[str, Optional[int]]:
        taxonomy = get_taxonomy()
        unknown = sorted(skill_id for skill_id in value if not taxonomy.has_skill(skill_id))
        if unknown:
            preview = ", ".join(unknown[:10])
            raise ValueError(f"Unknown skill ids: {preview}")
        return value


class SkillDetail(BaseModel):
    """A skill with its position in the graph."""

    id: str
    name: str
    tier: int
    domain_id: str
    sub_area_id: str
    skill_group_id: str
    direct_prerequisites: list[str] = Field(default_factory=list)
    dependents: list[str] = Field(default_factory=list)
    transitive_downstream: int = 0
    structural_prerequisites: list[str] = Field(default_factory=list)


class CouplingResponse(BaseModel):
    dependent_id: str
    prerequisite_id: str
    strength: float
    relationship: DependencyType
    is_direct_edge: bool


class SkillCeilingResponse(BaseModel):
    """Ceiling of one skill; `ceiling` is null when the skill has no prerequisites."""

    skill_id: str
    ceiling: SkillCeiling | None = None
