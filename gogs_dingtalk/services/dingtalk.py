"""DingTalk action card messages for Gogs hook events.

Refer: https://open-doc.dingtalk.com/docs/doc.htm?treeId=257&articleId=105735&docType=1
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gogs_dingtalk.config import settings
from gogs_dingtalk.errors import (
    InvalidPayloadError,
    PayloadEncodingError,
    UnsupportedEventError,
)
from gogs_dingtalk.schemas import (
    EVENT_MODELS,
    CreatePayload,
    DeletePayload,
    EventPayload,
    ForkPayload,
    HookEventType,
    HookIssueAction,
    HookIssueCommentAction,
    IssueCommentPayload,
    IssuesPayload,
    Label,
    Milestone,
    PullRequestPayload,
    PushPayload,
    ReleasePayload,
    User,
)
from gogs_dingtalk.utils import (
    comment_hash_tag,
    first_line,
    markdown_link,
    ref_short_name,
    title_case,
)

logger = logging.getLogger(__name__)

ACTION_CARD = "actionCard"


class _Wire(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class AtObject(_Wire):
    at_mobiles: list[str] = Field(default_factory=list, alias="atMobiles")
    is_at_all: bool = Field(False, alias="isAtAll")


class ActionCard(_Wire):
    title: str
    text: str = ""
    hide_avatar: str = Field("0", alias="hideAvatar")
    btn_orientation: str = Field("0", alias="btnOrientation")
    single_title: str = Field("", alias="singleTitle")
    single_url: str = Field("", alias="singleURL")


class DingtalkPayload(_Wire):
    msgtype: str = ACTION_CARD
    at: AtObject = Field(default_factory=AtObject)
    action_card: ActionCard = Field(alias="actionCard")

    def json_payload(self) -> bytes:
        """Encode the payload as indented UTF-8 JSON."""
        try:
            data = json.dumps(
                self.model_dump(by_alias=True), indent=2, ensure_ascii=False
            )
        except (TypeError, ValueError) as exc:
            raise PayloadEncodingError(str(exc)) from exc
        return data.encode("utf-8")


@dataclass(frozen=True)
class Message:
    """Formatter output: heading, detail lines and the card's single button."""

    heading: str
    lines: tuple[str, ...]
    link_text: str
    link_url: str

    @property
    def text(self) -> str:
        return "\n".join((self.heading, *self.lines))


@dataclass
class _MessageBuilder:
    heading: str
    link_text: str
    link_url: str
    lines: list[str] = field(default_factory=list)

    def add(self, line: str) -> None:
        self.lines.append(line)

    def build(self) -> Message:
        return Message(
            heading=self.heading,
            lines=tuple(self.lines),
            link_text=self.link_text,
            link_url=self.link_url,
        )


def _repo_line(name: str, url: str) -> str:
    return "- Repo: **" + markdown_link(url, name) + "**"


def _label_list(labels: Sequence[Label]) -> str:
    if not labels:
        return "**empty**"
    return ",".join("**" + label.name + "**" for label in labels)


def _action_lines(
    action: HookIssueAction,
    assignee: Optional[User],
    milestone: Optional[Milestone],
    labels: Sequence[Label],
) -> list[str]:
    if action == HookIssueAction.ASSIGNED:
        login = assignee.username if assignee else ""
        return ["- New Assignee: **" + login + "**"]
    if action == HookIssueAction.MILESTONED:
        title = milestone.title if milestone else ""
        return ["- New Milestone: **" + title + "**"]
    if action == HookIssueAction.LABEL_UPDATED:
        return ["- Labels: " + _label_list(labels)]
    return []


def format_create(p: CreatePayload) -> Message:
    ref_name = ref_short_name(p.ref)
    ref_type = title_case(p.ref_type)
    ref_url = p.repository.html_url + "/src/" + ref_name

    msg = _MessageBuilder("# New " + ref_type + " Create Event", "View " + ref_type, ref_url)
    msg.add(_repo_line(p.repository.name, p.repository.html_url))
    msg.add("- New " + ref_type + ": **" + markdown_link(ref_url, ref_name) + "**")
    return msg.build()


def format_delete(p: DeletePayload) -> Message:
    ref_name = ref_short_name(p.ref)
    ref_type = title_case(p.ref_type)

    msg = _MessageBuilder("# " + ref_type + " Delete Event", "View Repo", p.repository.html_url)
    msg.add(_repo_line(p.repository.name, p.repository.html_url))
    # the ref is gone, nothing to link to
    msg.add("- " + ref_type + ": **" + ref_name + "**")
    return msg.build()


def format_fork(p: ForkPayload) -> Message:
    msg = _MessageBuilder("# Repo Fork Event", "View Fork", p.forkee.html_url)
    msg.add("- From Repo: **" + markdown_link(p.repository.html_url, p.repository.name) + "**")
    msg.add("- To Repo: **" + markdown_link(p.forkee.html_url, p.forkee.full_name) + "**")
    return msg.build()


def format_push(p: PushPayload) -> Message:
    ref_name = ref_short_name(p.ref)
    repo_url = p.repository.html_url

    msg = _MessageBuilder("# Repo Push Event", "View Changes", p.compare_url or repo_url)
    msg.add(_repo_line(p.repository.name, repo_url))
    msg.add("- Ref: **" + markdown_link(repo_url + "/src/" + ref_name, ref_name) + "**")
    msg.add("- Pusher: **" + p.pusher.display_name + "**")
    msg.add(f"## Total {len(p.commits)} commits(s)")
    for i, commit in enumerate(p.commits):
        commit_link = markdown_link(commit.url, commit.id[:7])
        msg.add(f"> {i}. {commit_link} {commit.author.name} - {first_line(commit.message)}")
    return msg.build()


def format_issues(p: IssuesPayload) -> Message:
    issue_name = f"#{p.number} {p.issue.title}"
    issue_url = f"{p.repository.html_url}/issues/{p.number}"

    msg = _MessageBuilder(
        "# Issue Event " + title_case(p.action.value), "View Issue", issue_url
    )
    msg.add(_repo_line(p.repository.name, p.repository.html_url))
    msg.add("- Issue: **" + markdown_link(issue_url, issue_name) + "**")
    for line in _action_lines(p.action, p.issue.assignee, p.issue.milestone, p.issue.labels):
        msg.add(line)
    if p.issue.body:
        msg.add("> " + p.issue.body)
    return msg.build()


def format_issue_comment(p: IssueCommentPayload) -> Message:
    issue_name = f"#{p.issue.number} {p.issue.title}"
    issue_url = f"{p.repository.html_url}/issues/{p.issue.number}"
    comment_url = issue_url
    if p.action != HookIssueCommentAction.DELETED:
        comment_url += "#" + comment_hash_tag(p.comment.id)

    msg = _MessageBuilder(
        "# Issue Comment " + title_case(p.action.value), "View Issue Comment", comment_url
    )
    msg.add(_repo_line(p.repository.name, p.repository.html_url))
    msg.add("- Issue: " + markdown_link(issue_url, issue_name))
    msg.add("- Comment: " + markdown_link(comment_url, "View Comment"))
    msg.add("- Comment content: ")
    msg.add("> " + p.comment.body)
    return msg.build()


def format_pull_request(p: PullRequestPayload) -> Message:
    pr = p.pull_request
    heading = "# Pull Request " + title_case(p.action.value)
    if p.action == HookIssueAction.CLOSED and pr.merged:
        heading = "# Pull Request Merged"

    pull_request_url = f"{p.repository.html_url}/pulls/{p.number}"

    msg = _MessageBuilder(heading, "View Pull Request", pull_request_url)
    msg.add(_repo_line(p.repository.name, p.repository.html_url))
    msg.add("- PR: " + markdown_link(pull_request_url, f"#{p.number} {pr.title}"))
    for line in _action_lines(p.action, pr.assignee, pr.milestone, pr.labels):
        msg.add(line)
    if p.action in (HookIssueAction.OPENED, HookIssueAction.EDITED):
        msg.add("> " + pr.body)
    return msg.build()


def format_release(p: ReleasePayload) -> Message:
    release = p.release
    release_url = p.repository.html_url + "/src/" + release.tag_name

    msg = _MessageBuilder("# New Release Published", "View Release", release_url)
    msg.add("- Repo: " + markdown_link(p.repository.html_url, p.repository.name))
    msg.add("- Tag: " + markdown_link(release_url, release.tag_name))
    msg.add("- Author: " + release.author.display_name)
    msg.add("- Draft?: " + _bool_text(release.draft))
    msg.add("- Pre Release?: " + _bool_text(release.prerelease))
    msg.add("- Title: " + release.name)
    if release.body:
        msg.add("- Note:")
        msg.add("> " + release.body)
    return msg.build()


def _bool_text(value: bool) -> str:
    return "true" if value else "false"


Formatter = Callable[[Any], Message]

FORMATTERS: dict[HookEventType, Formatter] = {
    HookEventType.CREATE: format_create,
    HookEventType.DELETE: format_delete,
    HookEventType.FORK: format_fork,
    HookEventType.PUSH: format_push,
    HookEventType.ISSUES: format_issues,
    HookEventType.ISSUE_COMMENT: format_issue_comment,
    HookEventType.PULL_REQUEST: format_pull_request,
    HookEventType.RELEASE: format_release,
}

_missing = set(HookEventType) - set(FORMATTERS)
if _missing:
    raise RuntimeError(f"no DingTalk formatter for {sorted(e.value for e in _missing)}")


def build_action_card_payload(title: str, message: Message) -> DingtalkPayload:
    """Wrap a formatted message into the action card wire schema."""
    card = ActionCard(
        title=title,
        text=message.text,
        single_title=message.link_text,
        single_url=message.link_url,
    )
    return DingtalkPayload(msgtype=ACTION_CARD, action_card=card)


def event_type(event: HookEventType | str) -> HookEventType:
    """Resolve an event tag, raising :class:`UnsupportedEventError` if unknown."""
    if isinstance(event, HookEventType):
        return event
    try:
        return HookEventType(event)
    except ValueError:
        logger.warning("unsupported hook event %r", event)
        raise UnsupportedEventError(event) from None


def parse_event(event: HookEventType | str, raw: Mapping[str, Any]) -> EventPayload:
    """Validate raw webhook JSON into the model for ``event``."""
    kind = event_type(event)
    try:
        return EVENT_MODELS[kind].model_validate(raw)
    except ValidationError as exc:
        raise InvalidPayloadError(kind.value, exc.errors(include_url=False)) from exc


def build_payload(
    event: HookEventType | str,
    data: EventPayload,
    *,
    title: Optional[str] = None,
) -> DingtalkPayload:
    """
    Build the DingTalk payload for one hook event.

    Raises
    ------
    UnsupportedEventError
        ``event`` is not a known hook event type.
    """
    kind = event_type(event)
    message = FORMATTERS[kind](data)
    return build_action_card_payload(
        settings.notification_title if title is None else title, message
    )
