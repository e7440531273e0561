"""
Unit tests for the CI trigger filter.

Dependencies: pytest
System role: Trigger validation
"""

import json

import pytest

from deploy.trigger import load_event, should_deploy


class TestShouldDeploy:
    """Only a push to main starts a run."""

    def test_push_to_main(self):
        assert should_deploy("push", {"ref": "refs/heads/main"}) is True

    @pytest.mark.parametrize(
        ("event_name", "event"),
        [
            ("push", {"ref": "refs/heads/feature"}),
            ("push", {"ref": "refs/tags/v1.0.0"}),
            ("push", {"ref": "refs/heads/main", "deleted": True}),
            ("pull_request", {"ref": "refs/heads/main"}),
            ("workflow_dispatch", {"ref": "refs/heads/main"}),
            ("push", {}),
        ],
    )
    def test_other_events_ignored(self, event_name, event):
        assert should_deploy(event_name, event) is False

    def test_custom_branch(self):
        assert should_deploy("push", {"ref": "refs/heads/release"}, branch="release") is True


class TestLoadEvent:

    def test_reads_payload(self, tmp_path):
        path = tmp_path / "event.json"
        path.write_text(json.dumps({"ref": "refs/heads/main", "after": "abc"}))

        assert load_event(path)["after"] == "abc"
