"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/analysis", status_code=status.HTTP_200_OK)
def health_analysis() -> dict:
    """Report whether the image analysis model is configured."""
    return {
        "service": "gemini",
        "model": settings.gemini_model,
        "configured": bool(settings.gemini_api_key),
    }
