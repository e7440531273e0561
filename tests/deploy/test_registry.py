"""
Unit tests for ECR registry login.

Dependencies: pytest, unittest.mock, botocore
System role: Registry authentication validation
"""

import base64
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from deploy.exceptions import CommandError, RegistryAuthError
from deploy.registry import EcrRegistry

ENDPOINT = "https://123456789012.dkr.ecr.us-east-1.amazonaws.com"


def _token_response(token: str = "AWS:secret-password"):
    return {
        "authorizationData": [{
            "authorizationToken": base64.b64encode(token.encode()).decode(),
            "proxyEndpoint": ENDPOINT,
        }]
    }


@pytest.fixture
def ecr_client():
    client = MagicMock()
    client.get_authorization_token.return_value = _token_response()
    return client


class TestGetCredentials:
    """Test suite for token retrieval."""

    def test_decodes_token(self, ecr_client, runner):
        registry = EcrRegistry("us-east-1", runner, client=ecr_client)

        assert registry.get_credentials() == ("AWS", "secret-password", ENDPOINT)

    def test_password_may_contain_colon(self, ecr_client, runner):
        ecr_client.get_authorization_token.return_value = _token_response("AWS:pa:ss")
        registry = EcrRegistry("us-east-1", runner, client=ecr_client)

        assert registry.get_credentials()[1] == "pa:ss"

    def test_client_error_raises_auth_error(self, ecr_client, runner):
        ecr_client.get_authorization_token.side_effect = ClientError(
            {"Error": {"Code": "AccessDeniedException", "Message": "denied"}},
            "GetAuthorizationToken",
        )
        registry = EcrRegistry("us-east-1", runner, client=ecr_client)

        with pytest.raises(RegistryAuthError, match="authorization token"):
            registry.get_credentials()

    def test_malformed_response(self, ecr_client, runner):
        ecr_client.get_authorization_token.return_value = {"authorizationData": []}
        registry = EcrRegistry("us-east-1", runner, client=ecr_client)

        with pytest.raises(RegistryAuthError, match="Malformed"):
            registry.get_credentials()


class TestLogin:
    """Test suite for docker login."""

    def test_password_sent_on_stdin(self, ecr_client, runner):
        """
        Test docker login receives the password only through stdin.

        Arrange: Registry with mocked ECR client
        Act: login()
        Assert: Password absent from argv, present as input
        """
        # Arrange
        registry = EcrRegistry("us-east-1", runner, client=ecr_client)

        # Act
        endpoint = registry.login()

        # Assert
        assert endpoint == ENDPOINT
        assert runner.commands == [
            ["docker", "login", "--username", "AWS", "--password-stdin", ENDPOINT]
        ]
        assert runner.inputs == ["secret-password"]

    def test_docker_failure_raises_auth_error(self, ecr_client, runner_factory):
        runner = runner_factory(fail_on="docker login")
        registry = EcrRegistry("us-east-1", runner, client=ecr_client)

        with pytest.raises(RegistryAuthError) as exc_info:
            registry.login()

        assert isinstance(exc_info.value.__cause__, CommandError)

    def test_no_login_without_token(self, ecr_client, runner):
        ecr_client.get_authorization_token.return_value = {}
        registry = EcrRegistry("us-east-1", runner, client=ecr_client)

        with pytest.raises(RegistryAuthError):
            registry.login()

        assert runner.commands == []
