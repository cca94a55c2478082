"""
Preferences Service

Reporting currency, theme and the signed-in user's profile, kept in the
same key-value backend as the ledger.

DESIGN DECISION: Nothing in the valuation or alerting core reads these.
The app asks this service for the reporting currency and passes it in.
"""

from typing import Callable, Optional

import structlog
from pydantic import ValidationError

from balance_book.currency.rates import RateTable
from balance_book.models.ledger import Theme, UserProfile
from balance_book.services.storage.interface import KeyValueBackend


logger = structlog.get_logger(__name__)

CURRENCY_KEY = "bb_currency"
THEME_KEY = "bb_theme"
USER_PROFILE_KEY = "bb_user_profile"


class UnsupportedCurrencyError(ValueError):
    """The requested reporting currency has no exchange rate."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"No exchange rate for currency {code}")


class PreferencesService:
    """
    Typed access to the scalar preferences and the user profile.

    get()/set() expose the raw key-value semantics for anything else.
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        rates: RateTable,
        default_currency: str = "INR",
        default_theme: Theme = Theme.DARK,
        on_change: Optional[Callable[[str, str], None]] = None,
    ):
        self._backend = backend
        self._rates = rates
        self._default_currency = default_currency.upper()
        self._default_theme = Theme(default_theme)
        self._on_change = on_change

    def get(self, key: str) -> Optional[str]:
        return self._backend.get(key)

    def set(self, key: str, value: str) -> None:
        self._backend.set(key, value)
        if self._on_change:
            self._on_change(key, value)

    # Reporting currency

    @property
    def reporting_currency(self) -> str:
        stored = self._backend.get(CURRENCY_KEY)
        if stored and stored.upper() in self._rates:
            return stored.upper()
        return self._default_currency

    @reporting_currency.setter
    def reporting_currency(self, code: str) -> None:
        code = code.strip().upper()
        if code not in self._rates:
            raise UnsupportedCurrencyError(code)
        self.set(CURRENCY_KEY, code)

    # Theme

    @property
    def theme(self) -> Theme:
        stored = self._backend.get(THEME_KEY)
        try:
            return Theme(stored) if stored else self._default_theme
        except ValueError:
            return self._default_theme

    @theme.setter
    def theme(self, value: Theme) -> None:
        self.set(THEME_KEY, Theme(value).value)

    def toggle_theme(self) -> Theme:
        new_theme = Theme.LIGHT if self.theme == Theme.DARK else Theme.DARK
        self.theme = new_theme
        return new_theme

    # User profile

    @property
    def user_profile(self) -> Optional[UserProfile]:
        """The stored profile, or None when signed out."""
        raw = self._backend.get(USER_PROFILE_KEY)
        if not raw:
            return None
        try:
            return UserProfile.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("user_profile_unreadable", error=str(e))
            return None

    @user_profile.setter
    def user_profile(self, profile: UserProfile) -> None:
        self._backend.set(USER_PROFILE_KEY, profile.model_dump_json(by_alias=True))
        if self._on_change:
            self._on_change(USER_PROFILE_KEY, profile.name)

    def sign_out(self) -> None:
        """Forget the profile. Ledger data stays on the device."""
        self._backend.delete(USER_PROFILE_KEY)
