"""
FastResume service entry point.

    uvicorn fastresume.main:app --reload
"""

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from fastresume.api.routes.analyze import router as analyze_router

SERVICE_NAME = "fastresume"
API_VERSION = "0.1.0"
API_DESCRIPTION = (
    "Reads a plain-text résumé and an optional job description and returns the "
    "candidate's work history, skills, ranked requirement matches and how well "
    "each JD category is covered. Heuristic only; identical input always gives "
    "identical output."
)
OPENAPI_TAGS = [
    {"name": "analysis", "description": "Résumé/JD analysis from pasted text, uploaded files or batches"},
    {"name": "health", "description": "Liveness checks"},
]

app = FastAPI(
    title="FastResume",
    description=API_DESCRIPTION,
    version=API_VERSION,
    openapi_tags=OPENAPI_TAGS,
)
app.include_router(analyze_router)


@app.get("/", tags=["health"])
def root():
    return {"service": SERVICE_NAME, "status": "running", "version": API_VERSION}


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}


def build_openapi_schema():
    """OpenAPI document with the tag list and a JD-matching summary, built once."""
    if app.openapi_schema:
        return app.openapi_schema
    schema = get_openapi(
        title="FastResume analysis API",
        version=API_VERSION,
        summary="Work-history parsing and job-description matching",
        description=API_DESCRIPTION,
        routes=app.routes,
        tags=OPENAPI_TAGS,
    )
    app.openapi_schema = schema
    return schema


app.openapi = build_openapi_schema
