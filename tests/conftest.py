import os
import tempfile
from pathlib import Path

import pytest

# Keep the hook task store out of the working directory.
_DB_DIR = tempfile.mkdtemp(prefix="gogs_dingtalk_")
os.environ["DB_URL"] = f"sqlite:///{Path(_DB_DIR) / 'test.sqlite3'}"
os.environ.setdefault("NOTIFICATION_TITLE", "Gogs Notification")

from gogs_dingtalk.schemas import (  # noqa: E402
    CreatePayload,
    DeletePayload,
    ForkPayload,
    HookEventType,
    IssueCommentPayload,
    IssuesPayload,
    PullRequestPayload,
    PushPayload,
    ReleasePayload,
)

REPO_URL = "https://git.example.com/acme/widgets"


def repo_json() -> dict:
    return {
        "id": 7,
        "name": "widgets",
        "full_name": "acme/widgets",
        "html_url": REPO_URL,
    }


def event_json(event: HookEventType) -> dict:
    """Webhook JSON as Gogs sends it for ``event``."""
    repo = repo_json()
    sender = {"id": 1, "username": "alice", "full_name": "Alice Liddell"}
    if event == HookEventType.CREATE:
        return {"ref": "refs/heads/feature", "ref_type": "branch", "repository": repo, "sender": sender}
    if event == HookEventType.DELETE:
        return {"ref": "v1.0", "ref_type": "tag", "pusher_type": "user", "repository": repo, "sender": sender}
    if event == HookEventType.FORK:
        return {
            "forkee": {
                "name": "widgets",
                "full_name": "bob/widgets",
                "html_url": "https://git.example.com/bob/widgets",
            },
            "repository": repo,
            "sender": sender,
        }
    if event == HookEventType.PUSH:
        return {
            "ref": "refs/heads/master",
            "before": "0000000",
            "after": "abcdef1234567890",
            "compare_url": REPO_URL + "/compare/0000000...abcdef1",
            "commits": [
                {
                    "id": "abcdef1234567890",
                    "message": "Fix bug\nlonger body",
                    "url": "u1",
                    "author": {"name": "Alice", "email": "alice@example.com"},
                }
            ],
            "repository": repo,
            "pusher": sender,
            "sender": sender,
        }
    if event == HookEventType.ISSUES:
        return {
            "action": "opened",
            "number": 3,
            "issue": {"id": 30, "number": 3, "title": "Crash on start", "body": "It crashes."},
            "repository": repo,
            "sender": sender,
        }
    if event == HookEventType.ISSUE_COMMENT:
        return {
            "action": "created",
            "issue": {"id": 30, "number": 3, "title": "Crash on start"},
            "comment": {"id": 99, "body": "Same here."},
            "repository": repo,
            "sender": sender,
        }
    if event == HookEventType.PULL_REQUEST:
        return {
            "action": "opened",
            "number": 5,
            "pull_request": {"id": 50, "number": 5, "title": "Add feature", "body": "Adds it."},
            "repository": repo,
            "sender": sender,
        }
    if event == HookEventType.RELEASE:
        return {
            "action": "published",
            "release": {
                "id": 11,
                "tag_name": "v1.0",
                "name": "First",
                "body": "Changelog",
                "draft": False,
                "prerelease": True,
                "author": {"id": 1, "username": "alice", "full_name": ""},
            },
            "repository": repo,
            "sender": sender,
        }
    raise AssertionError(event)


_MODELS = {
    HookEventType.CREATE: CreatePayload,
    HookEventType.DELETE: DeletePayload,
    HookEventType.FORK: ForkPayload,
    HookEventType.PUSH: PushPayload,
    HookEventType.ISSUES: IssuesPayload,
    HookEventType.ISSUE_COMMENT: IssueCommentPayload,
    HookEventType.PULL_REQUEST: PullRequestPayload,
    HookEventType.RELEASE: ReleasePayload,
}


def make_event(event: HookEventType, **overrides):
    data = event_json(event)
    data.update(overrides)
    return _MODELS[event].model_validate(data)


@pytest.fixture
def push_event() -> PushPayload:
    return make_event(HookEventType.PUSH)
