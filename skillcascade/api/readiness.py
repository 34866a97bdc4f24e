"""API endpoints for skill readiness, bottlenecks and tier breakdowns."""

import logging

from fastapi import APIRouter, HTTPException

from skillcascade.core.influence import (
    Bottleneck,
    SkillReadiness,
    TierBreakdown,
    cross_domain_bottlenecks,
    skill_readiness,
    sub_area_tier_breakdown,
)
from skillcascade.core.logging import get_logger, log_with_context
from skillcascade.core.prerequisite_graph import get_prerequisite_graph
from skillcascade.core.schemas_assessments import AssessmentSnapshot
from skillcascade.core.taxonomy import UnknownSkillError

logger = get_logger(__name__)

router = APIRouter()


@router.post("/skills/{skill_id}/readiness", response_model=SkillReadiness)
async def get_skill_readiness(skill_id: str, snapshot: AssessmentSnapshot) -> SkillReadiness:
    """
    Get readiness of a skill from its direct and structural prerequisites.

    Args:
        skill_id: Skill id
        snapshot: Current assessments

    Returns:
        SkillReadiness with ready flag, met fraction and unmet prerequisites

    Raises:
        HTTPException 404: If the skill is not in the taxonomy
        HTTPException 500: If computation fails
    """
    try:
        readiness = skill_readiness(skill_id, snapshot.assessments)

        log_with_context(
            logger,
            logging.INFO,
            f"Computed readiness for skill {skill_id}: {readiness.readiness:.2f}",
            skill_id=skill_id,
            ready=readiness.ready,
        )

        return readiness

    except UnknownSkillError:
        raise HTTPException(status_code=404, detail=f"Skill {skill_id} not found") from None
    except Exception as e:
        logger.exception(f"Failed to compute readiness for skill {skill_id}")
        raise HTTPException(status_code=500, detail="Failed to compute readiness") from e


@router.post("/bottlenecks", response_model=list[Bottleneck])
async def find_bottlenecks(snapshot: AssessmentSnapshot) -> list[Bottleneck]:
    """
    List weak prerequisites ordered by how many skills they block.

    Raises:
        HTTPException 500: If computation fails
    """
    try:
        return cross_domain_bottlenecks(snapshot.assessments)

    except Exception as e:
        logger.exception("Failed to compute bottlenecks")
        raise HTTPException(status_code=500, detail="Failed to compute bottlenecks") from e


@router.post("/sub-areas/{sub_area_id}/tier-breakdown", response_model=dict[int, TierBreakdown])
async def get_tier_breakdown(sub_area_id: str, snapshot: AssessmentSnapshot) -> dict[int, TierBreakdown]:
    """
    Per-tier totals and met counts for a sub-area.

    Raises:
        HTTPException 404: If the sub-area is not in the taxonomy
        HTTPException 500: If computation fails
    """
    if not get_prerequisite_graph().taxonomy.has_sub_area(sub_area_id):
        raise HTTPException(status_code=404, detail=f"Sub-area {sub_area_id} not found")

    try:
        return sub_area_tier_breakdown(sub_area_id, snapshot.assessments)

    except Exception as e:
        logger.exception(f"Failed to compute tier breakdown for sub-area {sub_area_id}")
        raise HTTPException(status_code=500, detail="Failed to compute tier breakdown") from e
