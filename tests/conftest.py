"""
Shared fixtures for the tskpaste test suite.
"""

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config lookup at an empty home so user files never leak in."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("TSKPASTE_CONFIG", raising=False)
    return home


class FakeDeliverer:
    """Records every payload and answers with a fixed verdict."""

    def __init__(self, ok: bool = True):
        self.ok = ok
        self.calls: list[str] = []

    def deliver(self, text: str) -> bool:
        self.calls.append(text)
        return self.ok


@pytest.fixture
def fake_deliverer():
    return FakeDeliverer()


@pytest.fixture
def failing_deliverer():
    return FakeDeliverer(ok=False)
