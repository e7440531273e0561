"""
CI trigger filter.

Only a push to the deploy branch starts a run. The CI runner hands over
the event name and a JSON payload (GitHub: GITHUB_EVENT_NAME and the
file at GITHUB_EVENT_PATH).
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

DEPLOY_BRANCH = "main"


def load_event(path: str | Path) -> dict[str, Any]:
    """Read a CI event payload from disk."""
    return json.loads(Path(path).read_text())


def should_deploy(
    event_name: str,
    event: Mapping[str, Any],
    branch: str = DEPLOY_BRANCH,
) -> bool:
    """
    Decide whether an event triggers the deployment pipeline.

    Args:
        event_name: CI event type (e.g., 'push', 'pull_request')
        event: Event payload
        branch: Branch whose pushes deploy

    Returns:
        bool: True for a push that updates `branch`
    """
    if event_name != "push":
        return False
    if event.get("deleted"):
        return False
    return event.get("ref") == f"refs/heads/{branch}"
