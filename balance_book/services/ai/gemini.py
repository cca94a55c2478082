"""
Gemini implementation of the AI gateway.

One client serves both capabilities:
- TextAdvisor: "BalanceBot" answers questions from the ledger context
- DocumentExtractor: reads receipt images into a JSON object

BOUNDARIES:
- The model only sees the context we build; it never touches storage
- No retries and no timeout here; that is left to the transport
- Failures are caught HERE and turned into an apology string or None
"""

import base64
import binascii
import json
from typing import TYPE_CHECKING, Any, Optional

import google.generativeai as genai
import structlog
from pydantic import ValidationError

from balance_book.config import GeminiSettings, get_settings
from balance_book.models.advisor import Attachment
from balance_book.services.ai.interface import (
    ADVISOR_EMPTY_MESSAGE,
    ADVISOR_UNAVAILABLE_MESSAGE,
    DocumentExtractor,
    SchemaT,
    TextAdvisor,
)

if TYPE_CHECKING:
    from balance_book.audit import AuditLogger


logger = structlog.get_logger(__name__)


def build_advisor_prompt(question: str, context: dict[str, Any]) -> str:
    """Prompt for a free-text advisor answer."""
    context_str = json.dumps(context, indent=2, default=str)
    return f"""You are "BalanceBot", an expert AI financial analyst for the "Balance Book" application.
Analyze the following financial context JSON data which represents the user's current business state.

IMPORTANT: The user's selected currency is in the "reportingCurrency" field of the context data.
You MUST format all monetary values in your response in this currency
(e.g. if USD, use $; if INR, use ₹; if EUR, use €).

Data Context:
{context_str}

User Query: "{question}"

Provide a professional, concise, and actionable response.
- If the user asks for a summary, generate a brief executive summary.
- If the user asks for advice, give specific recommendations based on the data.
- Format the output as plain text or Markdown.
- Keep it under 200 words unless detailed analysis is requested."""


def build_extraction_prompt(schema_json: dict[str, Any]) -> str:
    """Prompt for structured extraction from an image."""
    return f"""Analyze this receipt or invoice image and extract the transaction it records.

Return ONLY a JSON object matching this JSON schema:
{json.dumps(schema_json, indent=2)}

Rules:
- "type" is "Income" if money was received, otherwise "Expense"
- "category" is one of: Sales, Salary, Travel, Tools, Rent, Marketing, Other
- "date" uses the format YYYY-MM-DD
- "amount" is the final total as a plain number, without currency symbols
- Leave out any field you cannot read. Do not guess."""


def extract_json_object(text: str) -> Optional[dict[str, Any]]:
    """Find and parse the outermost JSON object in a model response."""
    start = text.find("{")
    end = text.rfind("}") + 1
    if start < 0 or end <= start:
        return None
    try:
        data = json.loads(text[start:end])
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


class GeminiGateway(TextAdvisor, DocumentExtractor):
    """
    AI gateway backed by Google Gemini.

    The SDK is configured lazily on first use so the app can start
    (and show its other pages) without an API key.
    """

    def __init__(
        self,
        settings: Optional[GeminiSettings] = None,
        audit_logger: Optional["AuditLogger"] = None,
    ):
        self._settings = settings
        self._audit_logger = audit_logger
        self._text_model = None
        self._json_model = None

    def _get_settings(self) -> GeminiSettings:
        if self._settings is None:
            self._settings = get_settings().gemini
        return self._settings

    def _configure_genai(self) -> None:
        """Configure Google Generative AI."""
        settings = self._get_settings()
        genai.configure(api_key=settings.api_key)
        self._text_model = genai.GenerativeModel(
            model_name=settings.model_name,
            generation_config={
                "temperature": settings.temperature,
                "max_output_tokens": settings.max_tokens,
            },
        )
        self._json_model = genai.GenerativeModel(
            model_name=settings.model_name,
            generation_config={
                "temperature": 0.1,  # Very low for consistency
                "max_output_tokens": 512,
                "response_mime_type": "application/json",
            },
        )

    def _models(self):
        if self._text_model is None or self._json_model is None:
            self._configure_genai()
        return self._text_model, self._json_model

    @staticmethod
    def _image_part(attachment: Attachment) -> dict[str, Any]:
        return {
            "mime_type": attachment.mime_type,
            "data": base64.b64decode(attachment.data_base64, validate=True),
        }

    def _report_failure(self, operation: str, error: Exception) -> None:
        logger.error("gemini_request_failed", operation=operation, error=str(error))
        if self._audit_logger:
            self._audit_logger.log_external_service_error(
                service=f"gemini:{operation}",
                error_message=str(error),
            )

    async def ask(
        self,
        prompt: str,
        context: dict[str, Any],
        attachment: Optional[Attachment] = None,
    ) -> str:
        contents: list[Any] = [build_advisor_prompt(prompt, context)]

        try:
            if attachment is not None:
                contents.append(self._image_part(attachment))
            text_model, _ = self._models()
            response = await text_model.generate_content_async(contents)
            text = (response.text or "").strip()
        except Exception as e:
            self._report_failure("ask", e)
            return ADVISOR_UNAVAILABLE_MESSAGE

        return text or ADVISOR_EMPTY_MESSAGE

    async def extract_structured(
        self,
        attachment: Attachment,
        schema: type[SchemaT],
    ) -> Optional[SchemaT]:
        try:
            image = self._image_part(attachment)
        except (binascii.Error, ValueError) as e:
            logger.warning("attachment_not_base64", error=str(e))
            return None

        prompt = build_extraction_prompt(schema.model_json_schema(by_alias=True))

        try:
            _, json_model = self._models()
            response = await json_model.generate_content_async([prompt, image])
            text = response.text or ""
        except Exception as e:
            self._report_failure("extract", e)
            return None

        data = extract_json_object(text)
        if data is None:
            logger.warning("extraction_not_json", response_length=len(text))
            return None

        try:
            return schema.model_validate(data)
        except ValidationError as e:
            logger.warning("extraction_schema_mismatch", error=str(e))
            return None
