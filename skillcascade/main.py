"""ASGI app serving the ceiling engine over HTTP."""

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from skillcascade.api import router as api_router

app = FastAPI(
    title="SkillCascade",
    description="Developmental dependency and ceiling engine for skill assessments",
    version="0.1.0",
)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Liveness check; does not touch the taxonomy or prerequisite graph."""
    return JSONResponse(content={"status": "ok"}, status_code=200)


# Ceilings, influence, readiness and Start Here routes
app.include_router(api_router, prefix="/v1", tags=["v1"])
