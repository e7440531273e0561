"""
ECR registry authentication.

Exchanges AWS credentials for a registry token and logs docker in with
it, the same handshake `aws ecr get-login-password | docker login` does.

Dependencies: boto3, docker CLI
System role: Registry login step of the pipeline
"""

import base64
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from deploy.commands import CommandRunner
from deploy.exceptions import CommandError, RegistryAuthError

logger = logging.getLogger(__name__)


class EcrRegistry:
    """Docker login against an ECR registry."""

    def __init__(
        self,
        region: str,
        runner: CommandRunner,
        client=None,
    ) -> None:
        """
        Initialize registry client.

        Args:
            region: AWS region of the registry
            runner: Runner used for `docker login`
            client: Pre-built boto3 ECR client (tests)
        """
        self._region = region
        self._runner = runner
        self._client = client or boto3.client("ecr", region_name=region)

    def get_credentials(self) -> tuple[str, str, str]:
        """
        Fetch a registry token.

        Returns:
            tuple[str, str, str]: (username, password, proxy_endpoint)

        Raises:
            RegistryAuthError: If the token cannot be obtained or decoded
        """
        try:
            response = self._client.get_authorization_token()
        except (ClientError, BotoCoreError) as e:
            raise RegistryAuthError(f"Could not get ECR authorization token: {e}") from e

        try:
            data = response["authorizationData"][0]
            token = base64.b64decode(data["authorizationToken"]).decode()
            username, password = token.split(":", 1)
            endpoint = data["proxyEndpoint"]
        except (KeyError, IndexError, ValueError) as e:
            raise RegistryAuthError(f"Malformed ECR authorization data: {e}") from e

        return username, password, endpoint

    def login(self) -> str:
        """
        Log docker in to the registry.

        Returns:
            str: Registry endpoint logged in to

        Raises:
            RegistryAuthError: If the token request or docker login fails
        """
        username, password, endpoint = self.get_credentials()

        try:
            self._runner.run(
                ["docker", "login", "--username", username, "--password-stdin", endpoint],
                input=password,
            )
        except CommandError as e:
            raise RegistryAuthError(f"docker login to {endpoint} failed: {e.message}") from e

        logger.info(f"✓ Logged in to {endpoint}")
        return endpoint
