"""Waste image classification through the Gemini multimodal model."""

from __future__ import annotations

import base64
import logging
import re
from functools import lru_cache

from google import genai
from google.genai import types
from pydantic import ValidationError

from ...config import settings
from ...models.domain import Severity
from ...schemas.reports import AnalysisResultModel

logger = logging.getLogger(__name__)

_DATA_URL_PREFIX = re.compile(r"^data:image/(png|jpeg|jpg);base64,")

FALLBACK_ANALYSIS = AnalysisResultModel(
    is_waste=True,
    severity=Severity.MEDIUM,
    waste_type="Unidentified",
    summary="AI analysis failed, report submitted for manual review.",
    materials=["Unknown"],
    is_recyclable=False,
    estimated_quantity="Unknown",
    cleanup_recommendation="Standard cleanup required",
    confidence_score=0.0,
)

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "isWaste": types.Schema(type=types.Type.BOOLEAN),
        "severity": types.Schema(type=types.Type.STRING, enum=[level.value for level in Severity]),
        "wasteType": types.Schema(type=types.Type.STRING),
        "summary": types.Schema(type=types.Type.STRING),
        "materials": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(type=types.Type.STRING),
            description="List of identified materials like Plastic, Glass, etc.",
        ),
        "isRecyclable": types.Schema(type=types.Type.BOOLEAN),
        "estimatedQuantity": types.Schema(type=types.Type.STRING),
        "cleanupRecommendation": types.Schema(type=types.Type.STRING),
        "confidenceScore": types.Schema(
            type=types.Type.NUMBER,
            description="Confidence score between 0 and 1",
        ),
    },
    required=[
        "isWaste",
        "severity",
        "wasteType",
        "summary",
        "materials",
        "isRecyclable",
        "estimatedQuantity",
        "cleanupRecommendation",
    ],
)


def build_prompt(description: str) -> str:
    return (
        "Analyze this image for a smart waste management system. "
        f'The user describes it as: "{description}".\n\n'
        "Perform a deep visual analysis to determine:\n"
        "1. Is this strictly waste/garbage? (Boolean)\n"
        "2. Severity Level (Low/Medium/High/Critical) based on health hazard and size.\n"
        '3. Primary Waste Type (e.g., "Domestic", "Industrial", "Construction", "Hazardous").\n'
        '4. Identify specific MATERIALS present (e.g., ["Single-use Plastic", "Organic Food", '
        '"Cardboard", "Metal Cans"]). Be specific about plastics.\n'
        "5. Is the majority of this waste recyclable? (Boolean)\n"
        '6. Estimate the quantity/size (e.g., "Small bag (<2kg)", "Pile (5-10kg)", "Large Dump (>50kg)").\n'
        '7. Provide a specific Cleanup Recommendation (e.g., "Requires gloves and separate plastic '
        'recycling bag", "Needs heavy machinery").\n'
        "8. A brief 1-sentence summary."
    )


def decode_image(image_base64: str) -> bytes:
    """Strip an optional data-URL prefix and decode the base64 payload."""
    clean = _DATA_URL_PREFIX.sub("", image_base64.strip())
    return base64.b64decode(clean, validate=True)


@lru_cache()
def get_gemini_client() -> genai.Client | None:
    """Get cached Gemini client instance, or None when no API key is configured."""
    if not settings.gemini_api_key:
        logger.warning("Gemini API key not configured; image analysis will use the fallback result")
        return None
    return genai.Client(api_key=settings.gemini_api_key)


def analyze_waste_image(
    image_base64: str,
    description: str,
    *,
    client: genai.Client | None = None,
) -> AnalysisResultModel:
    """Classify a waste photo.

    Never raises: any failure of the model call or of the response parsing
    is logged and answered with ``FALLBACK_ANALYSIS`` so the report can still
    be submitted for manual review.
    """
    client = client or get_gemini_client()
    if client is None:
        return FALLBACK_ANALYSIS.model_copy(deep=True)

    try:
        image_bytes = decode_image(image_base64)
        response = client.models.generate_content(
            model=settings.gemini_model,
            contents=[
                types.Part.from_bytes(data=image_bytes, mime_type="image/jpeg"),
                build_prompt(description),
            ],
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=RESPONSE_SCHEMA,
            ),
        )
        text = response.text
        if not text:
            raise ValueError("No response from AI")
        result = AnalysisResultModel.model_validate_json(text)
    except (ValueError, ValidationError) as exc:
        logger.warning(f"Gemini analysis returned unusable output: {exc}")
        return FALLBACK_ANALYSIS.model_copy(deep=True)
    except Exception as exc:
        logger.error(f"Gemini analysis error: {exc}")
        return FALLBACK_ANALYSIS.model_copy(deep=True)

    logger.info(f"Gemini classified image as {result.waste_type} ({result.severity.value})")
    return result
