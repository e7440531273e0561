"""
Continuous-deployment pipeline for the Medusa service.

On a push to main: checkout -> registry login -> build -> tag -> push ->
deploy to ECS, each step gating the next.
"""

from deploy.pipeline import Pipeline, PipelineRun, Step, StepResult, StepStatus
from deploy.steps import STEP_ORDER, DeploymentContext, DeploymentSteps, build_pipeline

__all__ = [
    "Pipeline",
    "PipelineRun",
    "Step",
    "StepResult",
    "StepStatus",
    "STEP_ORDER",
    "DeploymentContext",
    "DeploymentSteps",
    "build_pipeline",
]
