"""Tests for the preferences service."""

import pytest

from balance_book.models.ledger import Theme, UserProfile
from balance_book.services.preferences import (
    CURRENCY_KEY,
    THEME_KEY,
    USER_PROFILE_KEY,
    PreferencesService,
    UnsupportedCurrencyError,
)
from balance_book.services.storage import InMemoryKeyValueBackend, LedgerStore


@pytest.fixture
def changes():
    return []


@pytest.fixture
def preferences(backend, rates, changes):
    return PreferencesService(
        backend,
        rates,
        on_change=lambda key, value: changes.append((key, value)),
    )


class TestReportingCurrency:
    """Tests for the reporting currency preference."""

    def test_default_is_inr(self, preferences):
        """Test the default reporting currency."""
        assert preferences.reporting_currency == "INR"

    def test_set_and_persist(self, backend, preferences, changes):
        """Test a supported currency is stored."""
        preferences.reporting_currency = "eur"
        assert preferences.reporting_currency == "EUR"
        assert backend.get(CURRENCY_KEY) == "EUR"
        assert changes == [(CURRENCY_KEY, "EUR")]

    def test_rejects_unknown_currency(self, preferences):
        """Test a currency without a rate is rejected."""
        with pytest.raises(UnsupportedCurrencyError):
            preferences.reporting_currency = "XYZ"
        assert preferences.reporting_currency == "INR"

    def test_stale_stored_value_falls_back(self, rates):
        """Test a stored code that is no longer in the rate table is ignored."""
        backend = InMemoryKeyValueBackend({CURRENCY_KEY: "CHF"})
        assert PreferencesService(backend, rates).reporting_currency == "INR"


class TestTheme:
    """Tests for the theme preference."""

    def test_default_is_dark(self, preferences):
        """Test the default theme."""
        assert preferences.theme == Theme.DARK

    def test_toggle(self, backend, preferences):
        """Test toggling flips and persists the theme."""
        assert preferences.toggle_theme() == Theme.LIGHT
        assert backend.get(THEME_KEY) == "light"
        assert preferences.toggle_theme() == Theme.DARK

    def test_invalid_stored_theme(self, rates):
        """Test garbage in storage falls back to the default."""
        backend = InMemoryKeyValueBackend({THEME_KEY: "sepia"})
        assert PreferencesService(backend, rates).theme == Theme.DARK


class TestUserProfile:
    """Tests for sign-in state."""

    def test_signed_out_by_default(self, preferences):
        """Test no profile means signed out."""
        assert preferences.user_profile is None

    def test_save_and_load(self, preferences, changes):
        """Test the profile round-trips through storage."""
        preferences.user_profile = UserProfile(name="Alex Morgan", email="alex@example.com")
        profile = preferences.user_profile
        assert profile.name == "Alex Morgan"
        assert profile.role == "Owner"
        assert changes == [(USER_PROFILE_KEY, "Alex Morgan")]

    def test_sign_out_keeps_ledger(self, backend, preferences):
        """Test signing out removes only the profile."""
        ledger = LedgerStore(backend)
        ledger.update_stock("p1", -1)
        preferences.user_profile = UserProfile(name="Alex")

        preferences.sign_out()
        assert preferences.user_profile is None
        assert backend.get("bb_inventory") is not None

    def test_unreadable_profile(self, rates):
        """Test a corrupt profile reads as signed out."""
        backend = InMemoryKeyValueBackend({USER_PROFILE_KEY: "{oops"})
        assert PreferencesService(backend, rates).user_profile is None


class TestRawAccess:
    """Tests for get()/set()."""

    def test_get_set(self, preferences, changes):
        """Test raw key-value access."""
        assert preferences.get("bb_custom") is None
        preferences.set("bb_custom", "1")
        assert preferences.get("bb_custom") == "1"
        assert changes == [("bb_custom", "1")]
