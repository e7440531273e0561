"""
Deployment pipeline CLI.

Usage:
    python -m deploy run [--event PATH --event-name push --branch main]
    python -m deploy plan --environment dev
    python -m deploy steps

Commands:
- run: checkout, registry login, build, tag, push, deploy; exits 1 on failure
- plan: validate the infrastructure declaration and print its creation order
- steps: print the fixed pipeline step order

Dependencies: boto3, pydantic-settings, docker and git CLIs
System role: Entry point invoked by the CI runner
"""

import argparse
import json
import logging
import os
import sys

from deploy.exceptions import ConfigurationError, PipelineFailedError
from deploy.observability.logger import configure_logging
from deploy.pipeline import StepStatus
from deploy.steps import STEP_ORDER, DeploymentSteps
from deploy.trigger import DEPLOY_BRANCH, load_event, should_deploy

logger = logging.getLogger("deploy")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="deploy", description="Medusa deployment pipeline")
    parser.add_argument("--log-level", default=os.environ.get("LOG_LEVEL", "INFO"))
    subcommands = parser.add_subparsers(dest="command", required=True)

    run = subcommands.add_parser("run", help="Run the deployment pipeline")
    run.add_argument("--event", default=os.environ.get("GITHUB_EVENT_PATH"),
                     help="CI event payload (JSON file)")
    run.add_argument("--event-name", default=os.environ.get("GITHUB_EVENT_NAME"),
                     help="CI event type, e.g. push")
    run.add_argument("--branch", default=DEPLOY_BRANCH, help="Branch whose pushes deploy")

    plan = subcommands.add_parser("plan", help="Validate the resource declaration")
    plan.add_argument("--environment", default="dev")
    plan.add_argument("--project", default="medusa")

    subcommands.add_parser("steps", help="Print the pipeline step order")
    return parser


def _run(args: argparse.Namespace) -> int:
    from deploy.configs.settings import get_settings

    if args.event and args.event_name:
        try:
            event = load_event(args.event)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Cannot read CI event {args.event}: {e}")
            return 2
        if not should_deploy(args.event_name, event, branch=args.branch):
            logger.info(
                f"Skipping: '{args.event_name}' to {event.get('ref')} is not a push to {args.branch}"
            )
            return 0

    try:
        settings = get_settings()
    except ConfigurationError as e:
        logger.error(e.message)
        return 2

    steps = DeploymentSteps(settings)
    try:
        steps.pipeline().run()
    except PipelineFailedError as e:
        skipped = [r.name for r in e.run.results if r.status == StepStatus.SKIPPED]
        logger.error(f"Deployment failed at '{e.step}'; skipped: {', '.join(skipped) or 'none'}")
        return 1

    context = steps.context
    logger.info(
        f"Deployed {context.remote_image} (commit {context.commit_sha}) "
        f"as {context.task_definition_arn}"
    )
    return 0


def _plan(args: argparse.Namespace) -> int:
    from infra.configs.base import StackConfig
    from infra.graph.declaration import plan_declaration
    from infra.graph.errors import DeclarationError

    config = StackConfig(environment=args.environment, project=args.project)
    try:
        graph = plan_declaration(config)
    except DeclarationError as e:
        logger.error(f"Invalid declaration: {e.message}")
        return 2

    for position, name in enumerate(graph.creation_order(), start=1):
        descriptor = graph.get(name)
        deps = ", ".join(descriptor.depends_on) or "-"
        print(f"{position:2d}. {name} [{descriptor.kind.value}] <- {deps}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "run":
        return _run(args)
    if args.command == "plan":
        return _plan(args)

    for position, name in enumerate(STEP_ORDER, start=1):
        print(f"{position}. {name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
