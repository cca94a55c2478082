"""AI gateway: capability interfaces and the Gemini implementation."""

from balance_book.services.ai.interface import (
    ADVISOR_EMPTY_MESSAGE,
    ADVISOR_UNAVAILABLE_MESSAGE,
    DocumentExtractor,
    TextAdvisor,
)
from balance_book.services.ai.gemini import (
    GeminiGateway,
    build_advisor_prompt,
    build_extraction_prompt,
    extract_json_object,
)

__all__ = [
    "ADVISOR_EMPTY_MESSAGE",
    "ADVISOR_UNAVAILABLE_MESSAGE",
    "DocumentExtractor",
    "GeminiGateway",
    "TextAdvisor",
    "build_advisor_prompt",
    "build_extraction_prompt",
    "extract_json_object",
]
