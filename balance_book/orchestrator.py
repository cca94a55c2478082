"""
Main Orchestrator for Balance Book

This module ties together all the components and defines the
end-to-end flows for:
1. Advisor (question → ledger snapshot → AI answer)
2. Receipt scan (image → AI extraction → pre-filled transaction form)

DESIGN DECISION: The orchestrator enforces the boundaries:
- The model only sees the context built from the current snapshot
- A scanned receipt never saves itself; it only pre-fills the form
- One advisor question in flight at a time
- Every step is audited

create_app_components() wires the Ledger Store, preferences,
notifications and audit logging together for the app.
"""

import base64
from datetime import date
from typing import NamedTuple, Optional, Union
from uuid import UUID

import structlog
from pydantic import ValidationError

from balance_book.advisor import DEFAULT_RECENT_LIMIT, build_advisor_context
from balance_book.alerts import NotificationCenter
from balance_book.audit import AuditLogger, create_correlation_id
from balance_book.config import get_settings
from balance_book.currency.rates import RateTable, load_rate_table
from balance_book.models.advisor import (
    Attachment,
    ChatMessage,
    ChatRole,
    ReceiptExtraction,
    TransactionDraft,
)
from balance_book.models.ledger import Theme
from balance_book.services.ai import (
    ADVISOR_UNAVAILABLE_MESSAGE,
    DocumentExtractor,
    GeminiGateway,
    TextAdvisor,
)
from balance_book.services.preferences import PreferencesService
from balance_book.services.storage import (
    InMemoryAuditStorage,
    JsonFileKeyValueBackend,
    KeyValueBackend,
    LedgerStore,
    StorageError,
)


logger = structlog.get_logger(__name__)

ADVISOR_GREETING = (
    "Hello! I am BalanceBot. I can analyze your ledger, summarize expenses, "
    "or draft emails for clients. How can I help you today?"
)


class AdvisorBusyError(RuntimeError):
    """A question was asked while the previous one is still being answered."""

    def __init__(self):
        super().__init__("The advisor is still answering the previous question")


class AdvisorFlow:
    """
    Orchestrates the advisor conversation.

    Flow:
    1. Question → recorded in history
    2. Snapshot → context from the Ledger Store, in the reporting currency
    3. Ask → TextAdvisor (never raises, may return an apology)
    4. Answer → recorded in history and returned

    The model NEVER reads storage itself. It only sees the context.
    """

    def __init__(
        self,
        ledger: LedgerStore,
        preferences: PreferencesService,
        advisor: Optional[TextAdvisor],
        rates: RateTable,
        audit_logger: Optional[AuditLogger] = None,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
    ):
        self._ledger = ledger
        self._preferences = preferences
        self._advisor = advisor
        self._rates = rates
        self._audit_logger = audit_logger
        self._recent_limit = recent_limit
        self._busy = False
        self._history: list[ChatMessage] = [
            ChatMessage(role=ChatRole.AI, content=ADVISOR_GREETING)
        ]

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def history(self) -> list[ChatMessage]:
        return list(self._history)

    def build_context(self) -> dict:
        """The wire context for the current ledger snapshot."""
        context = build_advisor_context(
            accounts=self._ledger.get_accounts(),
            transactions=self._ledger.get_transactions(),
            invoices=self._ledger.get_invoices(),
            reporting_currency=self._preferences.reporting_currency,
            rates=self._rates,
            recent_limit=self._recent_limit,
        )
        return context.to_wire()

    async def _ask(
        self,
        question: str,
        attachment: Optional[Attachment],
        correlation_id: UUID,
    ) -> str:
        try:
            context = self.build_context()
        except StorageError as e:
            logger.error("advisor_context_failed", error=str(e))
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type="advisor_context_failed",
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            return ADVISOR_UNAVAILABLE_MESSAGE
        return await self._advisor.ask(question, context, attachment)

    async def answer(
        self,
        question: str,
        attachment: Optional[Attachment] = None,
        correlation_id: Optional[UUID] = None,
    ) -> str:
        """
        Answer one question about the ledger.

        Raises:
            AdvisorBusyError: If another question is still being answered
        """
        if self._busy:
            raise AdvisorBusyError()

        question = question.strip()
        if not question and attachment is None:
            raise ValueError("Question must not be empty")

        correlation_id = correlation_id or create_correlation_id()
        self._busy = True
        try:
            self._history.append(ChatMessage(role=ChatRole.USER, content=question))

            if self._audit_logger:
                self._audit_logger.log_advisor_question(
                    question=question,
                    correlation_id=correlation_id,
                    has_attachment=attachment is not None,
                )

            if self._advisor is None:
                logger.warning("advisor_not_configured")
                answer = ADVISOR_UNAVAILABLE_MESSAGE
            else:
                answer = await self._ask(question, attachment, correlation_id)

            self._history.append(ChatMessage(role=ChatRole.AI, content=answer))

            if self._audit_logger:
                self._audit_logger.log_advisor_response(answer, correlation_id)

            return answer
        finally:
            self._busy = False


class ReceiptScanFlow:
    """
    Orchestrates a receipt scan.

    Flow:
    1. Image → Attachment (base64)
    2. Extract → DocumentExtractor with the ReceiptExtraction schema
    3. Draft → TransactionDraft for the form (PAUSE - user saves it)

    The system NEVER saves a scanned transaction by itself.
    """

    def __init__(
        self,
        extractor: Optional[DocumentExtractor],
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._extractor = extractor
        self._audit_logger = audit_logger

    async def scan(
        self,
        image: Union[bytes, str],
        mime_type: str,
        today: Optional[date] = None,
        correlation_id: Optional[UUID] = None,
    ) -> Optional[TransactionDraft]:
        """
        Read a receipt image into a transaction draft.

        Args:
            image: Raw image bytes, or an already base64-encoded string
            mime_type: image/jpeg, image/png or image/webp

        Returns:
            A pre-filled draft, or None if nothing could be read

        Raises:
            ValidationError: If the MIME type is not a supported image type
        """
        correlation_id = correlation_id or create_correlation_id()

        if isinstance(image, bytes):
            image = base64.b64encode(image).decode("ascii")
        attachment = Attachment(mime_type=mime_type, data_base64=image)

        if self._extractor is None:
            logger.warning("receipt_extractor_not_configured")
            return None

        extraction = await self._extractor.extract_structured(attachment, ReceiptExtraction)
        fields_found = (
            sorted(extraction.model_dump(exclude_none=True).keys())
            if extraction is not None else []
        )

        if self._audit_logger:
            self._audit_logger.log_receipt_scanned(fields_found, correlation_id)

        if not fields_found:
            return None
        return TransactionDraft.from_extraction(extraction, today=today)


class AppComponents(NamedTuple):
    ledger: LedgerStore
    preferences: PreferencesService
    notifications: NotificationCenter
    advisor_flow: AdvisorFlow
    receipt_flow: ReceiptScanFlow
    audit_logger: AuditLogger
    audit_storage: InMemoryAuditStorage
    rates: RateTable


def create_app_components(
    backend: Optional[KeyValueBackend] = None,
    advisor: Optional[TextAdvisor] = None,
    extractor: Optional[DocumentExtractor] = None,
    use_gemini: bool = True,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        backend: Key-value backend. Defaults to the JSON file from settings.
        advisor: Text advisor. Defaults to Gemini when it is configured.
        extractor: Receipt extractor. Defaults to Gemini when it is configured.
        use_gemini: Set to False to run without the hosted model.

    Returns:
        AppComponents with the ledger already subscribed to audit and alerts
    """
    app_settings = get_settings().app
    rates = load_rate_table(app_settings)

    if backend is None:
        backend = JsonFileKeyValueBackend(get_settings().storage.data_path)

    audit_storage = InMemoryAuditStorage()
    audit_logger = AuditLogger(audit_storage)

    ledger = LedgerStore(backend)
    ledger.subscribe(audit_logger.log_ledger_change)

    preferences = PreferencesService(
        backend,
        rates,
        default_currency=app_settings.default_reporting_currency,
        default_theme=Theme(app_settings.default_theme),
        on_change=audit_logger.log_preference_changed,
    )

    notifications = NotificationCenter(
        ledger.get_products,
        ledger.get_invoices,
        due_soon_window_days=app_settings.due_soon_window_days,
        on_recompute=audit_logger.log_notifications_recomputed,
    )
    ledger.subscribe(notifications.handle_ledger_change)
    notifications.refresh()

    if use_gemini and (advisor is None or extractor is None):
        try:
            gateway = GeminiGateway(get_settings().gemini, audit_logger=audit_logger)
        except ValidationError as e:
            # Gemini not configured - the rest of the app still works
            logger.warning("gemini_not_configured", error=str(e))
        else:
            advisor = advisor or gateway
            extractor = extractor or gateway

    advisor_flow = AdvisorFlow(
        ledger,
        preferences,
        advisor,
        rates,
        audit_logger=audit_logger,
        recent_limit=app_settings.recent_transactions_limit,
    )
    receipt_flow = ReceiptScanFlow(extractor, audit_logger=audit_logger)

    return AppComponents(
        ledger=ledger,
        preferences=preferences,
        notifications=notifications,
        advisor_flow=advisor_flow,
        receipt_flow=receipt_flow,
        audit_logger=audit_logger,
        audit_storage=audit_storage,
        rates=rates,
    )
