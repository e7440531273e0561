"""
Shared test fixtures and configuration for entire test suite.

Provides: settings cache reset, isolation from developer AWS/CI environment
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

import pytest

PIPELINE_ENV_VARS = (
    "AWS_ECR_REPOSITORY",
    "AWS_ACCOUNT_ID",
    "AWS_REGION",
    "ECS_TASK_DEFINITION",
    "ECS_SERVICE",
    "ECS_CLUSTER",
    "ECS_CONTAINER_NAME",
    "SOURCE_REF",
    "SOURCE_IMAGE_TAG",
    "SOURCE_DIRECTORY",
    "SOURCE_BUILD_CONTEXT",
    "ECS_WAIT_FOR_STABILITY",
    "ECS_STABILITY_TIMEOUT_SECONDS",
    "GITHUB_EVENT_PATH",
    "GITHUB_EVENT_NAME",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Clear pipeline env vars and run from an empty directory (no stray .env)."""
    for name in PIPELINE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reset the cached pipeline settings between tests."""
    from deploy.configs.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
