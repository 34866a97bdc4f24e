"""API router for v1 endpoints."""

from fastapi import APIRouter

from skillcascade.api import ceilings, readiness, taxonomy

router = APIRouter()

# Static taxonomy, coupling and domain matrix
router.include_router(taxonomy.router, tags=["taxonomy"])

# Snapshot-driven ceilings, influence and Start Here
router.include_router(ceilings.router, tags=["ceilings"])

# Readiness, bottlenecks and tier breakdowns
router.include_router(readiness.router, tags=["readiness"])
