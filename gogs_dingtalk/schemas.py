"""Gogs webhook payload schemas.

Only the fields the DingTalk formatters read are declared; anything else in
the incoming JSON is ignored.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class HookEventType(str, Enum):
    CREATE = "create"
    DELETE = "delete"
    FORK = "fork"
    PUSH = "push"
    ISSUES = "issues"
    ISSUE_COMMENT = "issue_comment"
    PULL_REQUEST = "pull_request"
    RELEASE = "release"


class HookIssueAction(str, Enum):
    OPENED = "opened"
    CLOSED = "closed"
    REOPENED = "reopened"
    EDITED = "edited"
    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"
    LABEL_UPDATED = "label_updated"
    LABEL_CLEARED = "label_cleared"
    MILESTONED = "milestoned"
    DEMILESTONED = "demilestoned"
    SYNCHRONIZED = "synchronized"


class HookIssueCommentAction(str, Enum):
    CREATED = "created"
    EDITED = "edited"
    DELETED = "deleted"


class HookReleaseAction(str, Enum):
    PUBLISHED = "published"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class User(_Frozen):
    id: int = 0
    username: str = ""
    full_name: str = ""
    email: str = ""

    @property
    def display_name(self) -> str:
        """Full name, or the login handle when no full name is set."""
        return self.full_name or self.username


class PayloadUser(_Frozen):
    """Commit author/committer as recorded in git."""

    name: str = ""
    email: str = ""
    username: str = ""


class Repository(_Frozen):
    id: int = 0
    name: str
    full_name: str = ""
    html_url: str
    owner: Optional[User] = None


class PayloadCommit(_Frozen):
    id: str
    message: str = ""
    url: str = ""
    author: PayloadUser = Field(default_factory=PayloadUser)


class Label(_Frozen):
    id: int = 0
    name: str
    color: str = ""


class Milestone(_Frozen):
    id: int = 0
    title: str


class Issue(_Frozen):
    id: int = 0
    number: int = 0
    title: str = ""
    body: str = ""
    user: Optional[User] = None
    labels: tuple[Label, ...] = ()
    assignee: Optional[User] = None
    milestone: Optional[Milestone] = None
    state: str = ""


class Comment(_Frozen):
    id: int
    body: str = ""
    user: Optional[User] = None


class PullRequest(Issue):
    merged: bool = False


class Release(_Frozen):
    id: int = 0
    tag_name: str
    name: str = ""
    body: str = ""
    draft: bool = False
    prerelease: bool = False
    author: User = Field(default_factory=User)


class CreatePayload(_Frozen):
    ref: str
    ref_type: str
    repository: Repository
    sender: Optional[User] = None


class DeletePayload(_Frozen):
    ref: str
    ref_type: str
    pusher_type: str = ""
    repository: Repository
    sender: Optional[User] = None


class ForkPayload(_Frozen):
    forkee: Repository
    repository: Repository
    sender: Optional[User] = None


class PushPayload(_Frozen):
    ref: str
    before: str = ""
    after: str = ""
    compare_url: str = ""
    commits: tuple[PayloadCommit, ...] = ()
    repository: Repository
    pusher: User = Field(default_factory=User)
    sender: Optional[User] = None


class IssuesPayload(_Frozen):
    action: HookIssueAction
    number: int
    issue: Issue
    repository: Repository
    sender: Optional[User] = None


class IssueCommentPayload(_Frozen):
    action: HookIssueCommentAction
    issue: Issue
    comment: Comment
    repository: Repository
    sender: Optional[User] = None


class PullRequestPayload(_Frozen):
    action: HookIssueAction
    number: int
    pull_request: PullRequest
    repository: Repository
    sender: Optional[User] = None


class ReleasePayload(_Frozen):
    action: HookReleaseAction = HookReleaseAction.PUBLISHED
    release: Release
    repository: Repository
    sender: Optional[User] = None


EventPayload = Union[
    CreatePayload,
    DeletePayload,
    ForkPayload,
    PushPayload,
    IssuesPayload,
    IssueCommentPayload,
    PullRequestPayload,
    ReleasePayload,
]

EVENT_MODELS: dict[HookEventType, type[BaseModel]] = {
    HookEventType.CREATE: CreatePayload,
    HookEventType.DELETE: DeletePayload,
    HookEventType.FORK: ForkPayload,
    HookEventType.PUSH: PushPayload,
    HookEventType.ISSUES: IssuesPayload,
    HookEventType.ISSUE_COMMENT: IssueCommentPayload,
    HookEventType.PULL_REQUEST: PullRequestPayload,
    HookEventType.RELEASE: ReleasePayload,
}
