"""
Source checkout and image build configuration.

Dependencies: pydantic_settings
System role: Checkout and docker build configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from deploy.configs.base import PipelineBaseSettings


class SourceSettings(PipelineBaseSettings):
    """Settings for fetching the pushed revision and building the image."""

    model_config = SettingsConfigDict(
        env_prefix="SOURCE_",
    )

    directory: str = Field(
        default=".",
        description="Working tree the pipeline checks out and builds in",
    )
    remote: str = Field(
        default="origin",
        description="Git remote to fetch from",
    )
    ref: str = Field(
        default="main",
        description="Branch, tag or commit to check out",
    )
    build_context: str = Field(
        default=".",
        description="Docker build context, relative to the working tree",
    )
    image_tag: str = Field(
        default="latest",
        description="Tag given to the built image",
    )
