"""Image analysis services."""

from .gemini import FALLBACK_ANALYSIS, analyze_waste_image, get_gemini_client

__all__ = ["FALLBACK_ANALYSIS", "analyze_waste_image", "get_gemini_client"]
