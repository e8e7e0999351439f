"""FastAPI routes for the resume pipeline."""
from __future__ import annotations

import base64
import binascii
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from app.schemas import (
    AnalyzeResumeRequest,
    CandidateProfile,
    CompanyReviewRequest,
    CompanyReviewResponse,
)
from orchestrator.exceptions import PipelineError
from services.container import AppContainer
from services.documents import DocumentError, extract_text

router = APIRouter()
logger = logging.getLogger(__name__)


def get_container(request: Request) -> AppContainer:
    return request.app.state.container  # type: ignore[attr-defined]


def decode_upload(file_base64: str, max_bytes: int) -> bytes:
    """Decode a base64 upload, accepting an optional data-URL prefix."""

    _, _, body = file_base64.rpartition("base64,")
    try:
        data = base64.b64decode(body.strip(), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(status_code=400, detail="File is not valid base64") from exc
    if not data:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    if len(data) > max_bytes:
        raise HTTPException(status_code=400, detail="Uploaded file is too large")
    return data


@router.post("/analyze-resume", response_model=CandidateProfile, response_model_exclude_none=True)
async def analyze_resume(
    payload: AnalyzeResumeRequest,
    container: AppContainer = Depends(get_container),
) -> CandidateProfile:
    if not payload.fileBase64 or not payload.filename:
        raise HTTPException(status_code=400, detail="Missing base64 file or filename")
    data = decode_upload(payload.fileBase64, container.settings.max_upload_bytes)
    try:
        resume_text = await run_in_threadpool(extract_text, data, payload.filename)
    except DocumentError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    try:
        return await container.runner.analyze(resume_text)
    except PipelineError as exc:
        logger.error("Resume analysis failed for %r: %s", payload.filename, exc)
        raise HTTPException(status_code=500, detail="Failed to analyze resume") from exc


@router.post("/v1/company-reviews", response_model=CompanyReviewResponse)
async def company_reviews(
    payload: CompanyReviewRequest,
    container: AppContainer = Depends(get_container),
) -> CompanyReviewResponse:
    if not container.company_reviews:
        raise HTTPException(status_code=400, detail="Company reviews are not configured")
    items = await container.company_reviews.fetch_reviews(payload.companies)
    return CompanyReviewResponse(items=items)
