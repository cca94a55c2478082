"""
AI Gateway Capability Interfaces

DESIGN DECISION: The hosted model is an OPAQUE collaborator.
The rest of the system only knows two capabilities:

1. TextAdvisor - answer a question given a JSON context (and maybe an image)
2. DocumentExtractor - read structured data off an image

Neither capability raises on model or network failure:
- ask() returns a fixed apology string
- extract_structured() returns None ("no data extracted")

This keeps the context-building logic testable with simple fakes.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, TypeVar

from pydantic import BaseModel

from balance_book.models.advisor import Attachment


SchemaT = TypeVar("SchemaT", bound=BaseModel)

ADVISOR_UNAVAILABLE_MESSAGE = (
    "I'm currently having trouble connecting to the financial brain. "
    "Please try again later."
)
ADVISOR_EMPTY_MESSAGE = "I apologize, I could not generate an insight at this moment."


class TextAdvisor(ABC):
    """Answers free-text questions about the user's finances."""

    @abstractmethod
    async def ask(
        self,
        prompt: str,
        context: dict[str, Any],
        attachment: Optional[Attachment] = None,
    ) -> str:
        """
        Ask the model a question.

        Args:
            prompt: The user's question
            context: JSON-serialisable financial context
            attachment: Optional image to send along

        Returns:
            The model's answer, or a fixed apology on failure
        """
        pass


class DocumentExtractor(ABC):
    """Reads structured data from a document image."""

    @abstractmethod
    async def extract_structured(
        self,
        attachment: Attachment,
        schema: type[SchemaT],
    ) -> Optional[SchemaT]:
        """
        Extract data matching schema from the attachment.

        Returns:
            A schema instance, or None if nothing usable was extracted
        """
        pass
