"""Shared fixtures for backendgen tests."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def _users_doc() -> dict[str, Any]:
    with open(FIXTURES / "users.json") as f:
        return json.load(f)


@pytest.fixture
def users_spec(_users_doc) -> dict[str, Any]:
    """Users API: inline POST /users plus ref-based CRUD on /users/{id}.

    A fresh deep copy per test, so tests may edit it freely.
    """
    return copy.deepcopy(_users_doc)


# ---------------------------------------------------------------------------
# Handler lookup
# ---------------------------------------------------------------------------

@pytest.fixture
def handler_source():
    """Return a callable that cuts one generated handler out of handlers.go.

    Usage in tests::

        body = handler_source(artifacts["handlers.go"], "GetUser")
    """
    def _cut(handlers_go: str, name: str) -> str:
        marker = f"func (s *Server) {name}("
        start = handlers_go.index(marker)
        end = handlers_go.find("\n}\n", start)
        return handlers_go[start:end + 3]
    return _cut
