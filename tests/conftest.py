"""
Pytest configuration and shared fixtures.
"""

import io
import os
import sys
import pytest
from rich.console import Console

# Add repository root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def mock_env(monkeypatch, tmp_path):
    """Isolate tests from TICKER_* variables and any local .env file."""
    for key in list(os.environ):
        if key.startswith("TICKER_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


# ============================================================================
# State Fixtures
# ============================================================================

@pytest.fixture
def store():
    """Create a CardStore with a small capacity."""
    from buildticker.state.cards import CardStore
    return CardStore(max_cards=3)


@pytest.fixture
def ingest(store):
    """Normalize a payload and apply it to the store."""
    from buildticker.services import apply, normalize

    def _ingest(payload):
        event = normalize(payload)
        apply(store, event)
        return event

    return _ingest


# ============================================================================
# Rendering Fixtures
# ============================================================================

@pytest.fixture
def console():
    """Create a recording Rich console that writes to memory."""
    return Console(file=io.StringIO(), record=True, width=100, color_system=None)


@pytest.fixture
def renderer(console):
    """Create a BoardRenderer bound to the recording console."""
    from buildticker.board.renderer import BoardRenderer
    return BoardRenderer(console=console)
