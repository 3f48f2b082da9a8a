"""
Pytest configuration and shared fixtures for n8n-validate tests.
"""

import copy
import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# =============================================================================
# Workflow Fixtures
# =============================================================================

VALID_WORKFLOW: dict[str, Any] = {
    "name": "Order intake",
    "nodes": [
        {
            "id": "a1",
            "name": "Webhook",
            "type": "n8n-nodes-base.webhook",
            "typeVersion": 2,
            "position": [0, 0],
            "parameters": {"path": "orders", "httpMethod": "POST"},
        },
        {
            "id": "b2",
            "name": "Check total",
            "type": "n8n-nodes-base.if",
            "typeVersion": 2,
            "position": [220, 0],
            "parameters": {"conditions": {"combinator": "and", "conditions": []}},
        },
    ],
    "connections": {
        "Webhook": {"main": [[{"node": "Check total", "type": "main", "index": 0}]]}
    },
    "active": False,
    "settings": {"executionOrder": "v1"},
}


@pytest.fixture
def valid_workflow() -> dict[str, Any]:
    """A structurally valid two-node workflow (fresh copy per test)."""
    return copy.deepcopy(VALID_WORKFLOW)


@pytest.fixture
def make_node() -> Callable[..., dict[str, Any]]:
    """Factory for valid node objects with overridable fields."""

    def _make_node(**overrides: Any) -> dict[str, Any]:
        node: dict[str, Any] = {
            "id": "n1",
            "name": "Set fields",
            "type": "n8n-nodes-base.set",
            "typeVersion": 3,
            "position": [100, 200],
            "parameters": {},
        }
        node.update(overrides)
        return node

    return _make_node


@pytest.fixture
def workflow_text() -> Callable[[Any], str]:
    """Serialize a document the way n8n exports it (2-space indent)."""

    def _workflow_text(document: Any) -> str:
        return json.dumps(document, indent=2)

    return _workflow_text


@pytest.fixture
def nested_lists() -> Callable[[int], list[Any]]:
    """Factory for a list nested ``depth`` levels deep (built without recursion)."""

    def _nested_lists(depth: int) -> list[Any]:
        value: list[Any] = []
        for _ in range(depth):
            value = [value]
        return value

    return _nested_lists


@pytest.fixture
def workflow_file(tmp_path: Path, valid_workflow: dict[str, Any]) -> Path:
    """A valid workflow written to a temporary file."""
    path = tmp_path / "workflow.json"
    path.write_text(json.dumps(valid_workflow, indent=2), encoding="utf-8")
    return path


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "property: Property-based tests")
    config.addinivalue_line("markers", "cli: CLI tests")
