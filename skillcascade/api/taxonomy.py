"""API endpoints for the static taxonomy and prerequisite graph."""

from fastapi import APIRouter, HTTPException, Query

from skillcascade.core.influence import coupling_strength
from skillcascade.core.logging import get_logger
from skillcascade.core.prerequisite_graph import DomainChordMatrix, get_prerequisite_graph
from skillcascade.core.schemas_assessments import CouplingResponse, SkillDetail
from skillcascade.core.taxonomy import TaxonomyStats, UnknownSkillError

logger = get_logger(__name__)

router = APIRouter()


@router.get("/taxonomy/stats", response_model=TaxonomyStats)
async def get_taxonomy_stats() -> TaxonomyStats:
    """Count domains, sub-areas, skill groups and skills."""
    return get_prerequisite_graph().taxonomy.stats()


@router.get("/skills/{skill_id}", response_model=SkillDetail)
async def get_skill(skill_id: str) -> SkillDetail:
    """
    Get a skill with its direct prerequisites, dependents and structural prerequisites.

    Raises:
        HTTPException 404: If the skill is not in the taxonomy
    """
    graph = get_prerequisite_graph()
    try:
        skill = graph.taxonomy.skill(skill_id)
    except UnknownSkillError:
        raise HTTPException(status_code=404, detail=f"Skill {skill_id} not found") from None

    _, structural = graph.all_prerequisites(skill_id)
    return SkillDetail(
        **skill.model_dump(),
        direct_prerequisites=list(graph.direct_prerequisites(skill_id)),
        dependents=list(graph.dependents(skill_id)),
        transitive_downstream=graph.transitive_downstream(skill_id),
        structural_prerequisites=list(structural),
    )


@router.get("/coupling", response_model=CouplingResponse)
async def get_coupling(
    dependent_id: str = Query(..., description="Dependent skill id"),
    prerequisite_id: str = Query(..., description="Prerequisite skill id"),
) -> CouplingResponse:
    """
    Get the coupling strength between a dependent skill and a prerequisite.

    Raises:
        HTTPException 404: If either skill is not in the taxonomy
    """
    graph = get_prerequisite_graph()
    try:
        dependent = graph.taxonomy.skill(dependent_id)
        prerequisite = graph.taxonomy.skill(prerequisite_id)
        strength = coupling_strength(dependent_id, prerequisite_id, graph=graph)
    except UnknownSkillError as e:
        raise HTTPException(status_code=404, detail=f"Skill {e.args[0]} not found") from None

    return CouplingResponse(
        dependent_id=dependent_id,
        prerequisite_id=prerequisite_id,
        strength=strength,
        relationship=graph.relationship(dependent.domain_id, prerequisite.domain_id),
        is_direct_edge=prerequisite_id in graph.direct_prerequisites(dependent_id),
    )


@router.get("/domains/chord-matrix", response_model=DomainChordMatrix)
async def get_domain_chord_matrix() -> DomainChordMatrix:
    """Cross-domain sub-area dependency counts for every domain pair."""
    return get_prerequisite_graph().domain_chord_matrix()
