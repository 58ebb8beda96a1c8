"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Isolation from TYPEPROPS_* variables set in the developer's shell
- Babel AST fixtures for end-to-end tests
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

from typeprops.config import EnvVar

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Configuration Constants
# =============================================================================

FIXTURES_DIR = Path(__file__).parent / "tests" / "fixtures"


# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test against the built-in configuration defaults.

    Tests that need a variable set it themselves with ``monkeypatch``.
    """
    for var in EnvVar:
        monkeypatch.delenv(var.value.name, raising=False)


# =============================================================================
# AST Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    """Directory holding Babel AST JSON fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def widget_json(fixtures_dir: Path) -> dict[str, Any]:
    """Babel AST of a module declaring a typed ``Widget`` component.

    Returns:
        A fresh dict each time, safe to mutate.
    """
    with (fixtures_dir / "widget.json").open(encoding="utf-8") as f:
        return json.load(f)
