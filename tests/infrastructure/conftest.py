"""Pytest fixtures for infrastructure tests."""

import sys
from pathlib import Path

import pytest


@pytest.fixture(scope="session", autouse=True)
def add_project_to_path():
    """Add project root to Python path for imports."""
    project_root = Path(__file__).parent.parent.parent
    sys.path.insert(0, str(project_root))
    yield
    sys.path.remove(str(project_root))


@pytest.fixture
def infra_root():
    """Return the infra package directory."""
    return Path(__file__).parent.parent.parent / "infra"


@pytest.fixture
def python_files_in_infra(infra_root):
    """Return all Python files in the infra package."""
    return [f for f in infra_root.rglob("*.py") if "__pycache__" not in str(f)]


@pytest.fixture
def stack_config():
    """Default dev stack configuration."""
    from infra.configs.base import StackConfig

    return StackConfig(environment="dev")


@pytest.fixture
def declaration(stack_config):
    """Validated declaration for the default dev stack."""
    from infra.graph.declaration import plan_declaration

    return plan_declaration(stack_config)
