"""Logging setup for the deployment pipeline."""

from deploy.observability.logger import configure_logging

__all__ = ["configure_logging"]
