"""
Unit tests for pipeline settings.

Dependencies: pytest, pydantic-settings
System role: Configuration validation
"""

import pytest

from deploy.configs.registry import RegistrySettings
from deploy.configs.settings import PipelineSettings, get_settings
from deploy.exceptions import ConfigurationError


class TestPipelineSettings:
    """Test suite for secrets mapped from the environment."""

    def test_loads_secrets(self, pipeline_env):
        settings = get_settings()

        assert settings.registry.ecr_repository == "medusa"
        assert settings.registry.account_id == "123456789012"
        assert settings.ecs.cluster == "medusa-dev-cluster"
        assert settings.ecs.service == "medusa-dev-service"
        assert settings.ecs.task_definition == "medusa-dev-task"

    def test_defaults(self, pipeline_env):
        settings = PipelineSettings()

        assert settings.source.ref == "main"
        assert settings.source.image_tag == "latest"
        assert settings.ecs.wait_for_stability is True
        assert settings.ecs.stability_timeout_seconds == 1800
        assert settings.ecs.container_name is None

    def test_cached(self, pipeline_env):
        assert get_settings() is get_settings()

    def test_missing_secret_raises_configuration_error(self, pipeline_env, monkeypatch):
        """
        Test a missing secret is reported by name before any step runs.

        Arrange: Remove ECS_CLUSTER
        Act: get_settings()
        Assert: ConfigurationError naming the field
        """
        # Arrange
        monkeypatch.delenv("ECS_CLUSTER")

        # Act & Assert
        with pytest.raises(ConfigurationError, match="cluster"):
            get_settings()

    def test_invalid_timeout_rejected(self, pipeline_env, monkeypatch):
        monkeypatch.setenv("ECS_STABILITY_TIMEOUT_SECONDS", "0")

        with pytest.raises(ConfigurationError):
            get_settings()

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text(
            "AWS_ECR_REPOSITORY=medusa\nAWS_ACCOUNT_ID=999999999999\nAWS_REGION=eu-west-1\n"
        )

        settings = RegistrySettings()

        assert settings.registry == "999999999999.dkr.ecr.eu-west-1.amazonaws.com"


class TestRegistrySettings:

    def test_image_uri(self, pipeline_env):
        settings = RegistrySettings()

        assert settings.registry == "123456789012.dkr.ecr.us-east-1.amazonaws.com"
        assert settings.image_uri("abc") == "123456789012.dkr.ecr.us-east-1.amazonaws.com/medusa:abc"
