"""
Mind Compare — Comparison API

Endpoints:
  - POST /narrative: full narrative bundle for two profiles
  - POST /share-text: plain-text export of the same bundle
  - GET /templates/audit: consistency report for the loaded template corpus
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter

from app.config import get_settings
from app.narrative.aggregator import NarrativeBundle
from app.narrative.repository import get_template_repository
from app.narrative.share_text import build_share_text
from app.schemas.compare import CompareRequest, CorpusAuditResponse, ShareTextResponse
from app.services.compare_service import CompareService
from app.utils.display_names import normalize_display_name

logger = structlog.get_logger("mindcompare.api.compare")

router = APIRouter()

# ── Service singleton ─────────────────────────────────────────────────────────

_compare_service: CompareService | None = None


def _get_compare_service() -> CompareService:
    global _compare_service
    if _compare_service is None:
        _compare_service = CompareService.from_settings(get_settings())
    return _compare_service


def _build_bundle(request: CompareRequest) -> NarrativeBundle:
    settings = get_settings()
    name_a = normalize_display_name(
        request.person_a.name,
        max_length=settings.DISPLAY_NAME_MAX_LENGTH,
        default=settings.DEFAULT_NAME_A,
    )
    name_b = normalize_display_name(
        request.person_b.name,
        max_length=settings.DISPLAY_NAME_MAX_LENGTH,
        default=settings.DEFAULT_NAME_B,
    )
    return _get_compare_service().compare(
        request.person_a.scores,
        request.person_b.scores,
        name_a,
        name_b,
    )


# ── Endpoints ─────────────────────────────────────────────────────────────────

@router.post("/narrative")
async def compare_narrative(request: CompareRequest) -> dict:
    """Build the comparison narrative for two profiles."""
    bundle = _build_bundle(request)
    payload = bundle.to_dict()
    if not request.include_traces:
        payload.pop("traces")
    return payload


@router.post("/share-text", response_model=ShareTextResponse)
async def compare_share_text(request: CompareRequest) -> ShareTextResponse:
    """Plain-text export, built from the same bundle as ``/narrative``."""
    bundle = _build_bundle(request)
    text = build_share_text(bundle, invite_url=get_settings().QUIZ_INVITE_URL or None)
    return ShareTextResponse(text=text, template_ids=bundle.template_ids())


@router.get("/templates/audit", response_model=CorpusAuditResponse)
async def audit_templates() -> CorpusAuditResponse:
    """Run the corpus consistency checks on the loaded templates."""
    repository = get_template_repository()
    defects = repository.audit()
    logger.info("templates.audit_requested", defects=len(defects))
    return CorpusAuditResponse(
        template_count=len(repository),
        clean=not defects,
        defects=[d.to_dict() for d in defects],
    )
