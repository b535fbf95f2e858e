"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the lesson content backend.
Controllers are intentionally thin: they accept requests, delegate to
the lesson registry or services, and return JSON responses.

Endpoints implemented:
- GET /health
- GET /lessons
- GET /lessons/count
- GET /lessons/{slug}
- GET /lessons/{slug}/exists
- GET /topics
- GET /topics/{topic}
- PUT /progress/{learner_id}/lessons/{slug}/code
- POST /progress/{learner_id}/lessons/{slug}/complete
- GET /progress/{learner_id}
"""

from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.responses import Response
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session
from typing import List
import json
import logging
import time
import uuid
from .database import create_db_and_tables, get_session
from . import services, models
from .registry import get_registry
from .schemas import (
    CountOut,
    ExistsOut,
    LessonContent,
    ProgressItemOut,
    ProgressSummaryOut,
    SaveCodeIn,
    SlugListOut,
    TopicDetailOut,
    TopicOut,
)
from .config import settings

app = FastAPI(title="Lesson Content API")
logger = logging.getLogger("app.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

# Wide-open CORS keeps local frontends working without extra config in dev.
if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Content errors (bad topic file, duplicate slug) abort startup here.
registry = get_registry()
create_db_and_tables()


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response: Response
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        logger.exception(
            "request_failed %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "duration_ms": elapsed_ms,
                    "client": request.client.host if request.client else "unknown",
                },
                ensure_ascii=True,
            ),
        )
        raise
    response.headers["X-Request-ID"] = req_id
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
    logger.info(
        "request_done %s",
        json.dumps(
            {
                "request_id": req_id,
                "path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "duration_ms": elapsed_ms,
                "client": request.client.host if request.client else "unknown",
            },
            ensure_ascii=True,
        ),
    )
    return response


def _require_lesson(slug: str) -> None:
    if not registry.has_lesson(slug):
        raise HTTPException(status_code=404, detail="lesson not found")


def _progress_out(row: models.LessonProgress) -> ProgressItemOut:
    return ProgressItemOut(
        lesson_slug=row.lesson_slug,
        status=row.status,
        saved_code=row.saved_code,
        completed_at=row.completed_at,
        updated_at=row.updated_at,
    )


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}


@app.get("/lessons", response_model=SlugListOut)
def list_lessons():
    """List every registered lesson slug together with the total count."""
    slugs = registry.get_all_lesson_slugs()
    return {"count": len(slugs), "slugs": list(slugs)}


@app.get("/lessons/count", response_model=CountOut)
def lesson_count():
    return {"count": registry.get_lesson_count()}


@app.get("/lessons/{slug}", response_model=LessonContent)
def get_lesson(slug: str):
    """Return the full lesson record for `slug`.

    Field names in the response are camelCase (`problemContent`,
    `starterCode`, ...). Unknown slugs return 404.
    """
    lesson = services.LessonService(registry).get_lesson(slug)
    if lesson is None:
        raise HTTPException(status_code=404, detail="lesson not found")
    return lesson


@app.get("/lessons/{slug}/exists", response_model=ExistsOut)
def lesson_exists(slug: str):
    return {"slug": slug, "exists": registry.has_lesson(slug)}


@app.get("/topics", response_model=List[TopicOut])
def list_topics():
    """List topics in merge order with their lesson counts."""
    return services.LessonService(registry).list_topics()


@app.get("/topics/{topic}", response_model=TopicDetailOut)
def get_topic(topic: str):
    detail = services.LessonService(registry).get_topic(topic)
    if detail is None:
        raise HTTPException(status_code=404, detail="topic not found")
    return detail


@app.put("/progress/{learner_id}/lessons/{slug}/code", response_model=ProgressItemOut)
def save_code(learner_id: str, slug: str, payload: SaveCodeIn, db: Session = Depends(get_session)):
    """Save the learner's current editor code for a lesson.

    Creates the progress row on first save. Oversized code returns 400.
    """
    _require_lesson(slug)
    svc = services.ProgressService(db, registry)
    try:
        row = svc.save_code(learner_id, slug, payload.code)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _progress_out(row)


@app.post("/progress/{learner_id}/lessons/{slug}/complete", response_model=ProgressItemOut)
def complete_lesson(learner_id: str, slug: str, db: Session = Depends(get_session)):
    """Mark a lesson completed for the learner (idempotent)."""
    _require_lesson(slug)
    svc = services.ProgressService(db, registry)
    try:
        row = svc.mark_complete(learner_id, slug)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _progress_out(row)


@app.get("/progress/{learner_id}", response_model=ProgressSummaryOut)
def get_progress(learner_id: str, db: Session = Depends(get_session)):
    """Return the learner's saved progress and completion counts."""
    svc = services.ProgressService(db, registry)
    try:
        summary = svc.get_progress(learner_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    summary["items"] = [_progress_out(r) for r in summary["items"]]
    return summary
