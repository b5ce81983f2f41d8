"""Pytest configuration and fixtures for arrow_template tests."""

import pytest

from arrow_template import Iterator

TRIBES = [
    "Achomawi",
    "Chemakum",
    "Chukchansi",
    "Clayoquot",
    "Coast Salish",
    "Cowichan",
    "Haida",
    "Hupa",
    "Hesquiat",
    "Karok",
    "Klamath",
    "Koskimo",
    "Kwakiutl",
    "Lummi",
    "Makah",
    "Nootka",
    "Puget Sound Salish",
    "Quileute",
    "Quinault",
    "Shasta",
    "Skokomish",
    "Tolowa",
    "Tututni",
    "Willapa",
    "Wiyot",
    "Yurok",
]


@pytest.fixture
def items() -> list[str]:
    """A fresh copy of the 26 test items."""
    return list(TRIBES)


@pytest.fixture
def iterator(items: list[str]) -> Iterator[str]:
    """An Iterator over the test items."""
    return Iterator(items)


@pytest.fixture
def plain_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    """Disable ANSI colours so formatted errors compare as plain text."""
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")


@pytest.fixture
def color_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    """Force ANSI colours regardless of TTY detection."""
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("FORCE_COLOR", "1")
