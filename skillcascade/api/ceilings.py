"""API endpoints for ceilings, influence and Start Here ranking."""

import logging

from fastapi import APIRouter, HTTPException, Query

from skillcascade.core.config import get_settings
from skillcascade.core.influence import (
    CeilingCoverage,
    ConstrainedSkill,
    InfluenceRecord,
    PriorityEntry,
    SkillCeiling,
    all_ceilings,
    ceiling_coverage,
    constrained_skills,
    skill_ceiling,
    skill_influence,
    start_here_priority,
)
from skillcascade.core.logging import get_logger, log_with_context
from skillcascade.core.schemas_assessments import AssessmentSnapshot, SkillCeilingResponse
from skillcascade.core.taxonomy import UnknownSkillError

logger = get_logger(__name__)

router = APIRouter()


@router.post("/ceilings", response_model=dict[str, SkillCeiling])
async def compute_all_ceilings(snapshot: AssessmentSnapshot) -> dict[str, SkillCeiling]:
    """
    Compute the ceiling of every skill that has prerequisites.

    Raises:
        HTTPException 500: If computation fails
    """
    try:
        ceilings = all_ceilings(snapshot.assessments)
        log_with_context(
            logger,
            logging.INFO,
            f"Computed {len(ceilings)} ceilings",
            assessed=len(snapshot.assessments),
        )
        return ceilings

    except Exception as e:
        logger.exception("Failed to compute ceilings")
        raise HTTPException(status_code=500, detail="Failed to compute ceilings") from e


@router.post("/skills/{skill_id}/ceiling", response_model=SkillCeilingResponse)
async def compute_skill_ceiling(skill_id: str, snapshot: AssessmentSnapshot) -> SkillCeilingResponse:
    """
    Compute the ceiling of a single skill.

    Raises:
        HTTPException 404: If the skill is not in the taxonomy
        HTTPException 500: If computation fails
    """
    try:
        ceiling = skill_ceiling(skill_id, snapshot.assessments)
        return SkillCeilingResponse(skill_id=skill_id, ceiling=ceiling)

    except UnknownSkillError:
        raise HTTPException(status_code=404, detail=f"Skill {skill_id} not found") from None
    except Exception as e:
        logger.exception(f"Failed to compute ceiling for skill {skill_id}")
        raise HTTPException(status_code=500, detail="Failed to compute ceiling") from e


@router.post("/constraints", response_model=list[ConstrainedSkill])
async def find_constrained_skills(snapshot: AssessmentSnapshot) -> list[ConstrainedSkill]:
    """
    List skills rated above their prerequisite ceiling, largest gap first.

    Raises:
        HTTPException 500: If computation fails
    """
    try:
        constrained = constrained_skills(snapshot.assessments)
        log_with_context(
            logger,
            logging.INFO,
            f"Found {len(constrained)} constrained skills",
            assessed=len(snapshot.assessments),
        )
        return constrained

    except Exception as e:
        logger.exception("Failed to compute constrained skills")
        raise HTTPException(status_code=500, detail="Failed to compute constrained skills") from e


@router.post("/influence", response_model=dict[str, InfluenceRecord])
async def compute_influence(snapshot: AssessmentSnapshot) -> dict[str, InfluenceRecord]:
    """
    Compute influence for every prerequisite skill.

    Raises:
        HTTPException 500: If computation fails
    """
    try:
        return skill_influence(snapshot.assessments)

    except Exception as e:
        logger.exception("Failed to compute influence")
        raise HTTPException(status_code=500, detail="Failed to compute influence") from e


@router.post("/start-here", response_model=list[PriorityEntry])
async def rank_start_here(
    snapshot: AssessmentSnapshot,
    limit: int | None = Query(None, ge=1, description="Maximum entries to return"),
) -> list[PriorityEntry]:
    """
    Rank unassessed skills by how informative they are to rate next.

    Args:
        snapshot: Current assessments
        limit: Maximum entries (defaults to START_HERE_DEFAULT_LIMIT)

    Raises:
        HTTPException 500: If computation fails
    """
    try:
        limit = limit or get_settings().START_HERE_DEFAULT_LIMIT
        ranked = start_here_priority(snapshot.assessments)
        log_with_context(
            logger,
            logging.INFO,
            f"Ranked {len(ranked)} unassessed skills, returning {min(limit, len(ranked))}",
            assessed=len(snapshot.assessments),
        )
        return ranked[:limit]

    except Exception as e:
        logger.exception("Failed to rank Start Here skills")
        raise HTTPException(status_code=500, detail="Failed to rank Start Here skills") from e


@router.post("/coverage", response_model=CeilingCoverage)
async def compute_coverage(snapshot: AssessmentSnapshot) -> CeilingCoverage:
    """
    Fraction of skills whose ceiling is known.

    Raises:
        HTTPException 500: If computation fails
    """
    try:
        return ceiling_coverage(snapshot.assessments)

    except Exception as e:
        logger.exception("Failed to compute ceiling coverage")
        raise HTTPException(status_code=500, detail="Failed to compute ceiling coverage") from e
