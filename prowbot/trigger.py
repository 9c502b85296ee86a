"""
Map the webhook payloads we react to into a single shape: the comment that
triggered the run and the issue or pull request it was left on.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Type, TypeVar, Union

import pydantic
from typing_extensions import Literal

from prowbot.assertions import assert_never
from prowbot.errors import (
    MalformedPayload,
    UnsupportedEventKind,
    WorkflowRunNotImplemented,
)
from prowbot.events import IssueCommentEvent, PullRequestReviewEvent, WorkflowRunEvent

T = TypeVar("T", bound=pydantic.BaseModel)


@dataclass(frozen=True)
class Comment:
    body: Optional[str]
    author: str


@dataclass(frozen=True)
class Parent:
    number: int


@dataclass(frozen=True)
class IssueCommentTrigger:
    owner: str
    repo: str
    comment: Comment
    parent: Parent
    kind: Literal["issue_comment"] = "issue_comment"


@dataclass(frozen=True)
class PullRequestReviewTrigger:
    owner: str
    repo: str
    comment: Comment
    parent: Parent
    kind: Literal["pull_request_review"] = "pull_request_review"


TriggerEvent = Union[IssueCommentTrigger, PullRequestReviewTrigger]


def parent_kind(trigger: TriggerEvent) -> str:
    if isinstance(trigger, IssueCommentTrigger):
        # pull request comments are delivered as issue comments
        return "issue"
    if isinstance(trigger, PullRequestReviewTrigger):
        return "pull_request"
    assert_never(trigger)


def _parse(schema: Type[T], event_name: str, payload: Mapping[str, Any]) -> T:
    try:
        return schema.model_validate(payload)
    except pydantic.ValidationError as e:
        raise MalformedPayload(event_name, e) from e


def normalize_event(event_name: str, payload: Mapping[str, Any]) -> TriggerEvent:
    if event_name == "issue_comment":
        issue_comment = _parse(IssueCommentEvent, event_name, payload)
        return IssueCommentTrigger(
            owner=issue_comment.repository.owner.login,
            repo=issue_comment.repository.name,
            comment=Comment(
                body=issue_comment.comment.body,
                author=issue_comment.comment.user.login,
            ),
            parent=Parent(number=issue_comment.issue.number),
        )
    if event_name == "pull_request_review":
        review = _parse(PullRequestReviewEvent, event_name, payload)
        return PullRequestReviewTrigger(
            owner=review.repository.owner.login,
            repo=review.repository.name,
            comment=Comment(body=review.review.body, author=review.review.user.login),
            parent=Parent(number=review.pull_request.number),
        )
    if event_name == "workflow_run":
        # TODO: look up the pull_request_review that started the run once we
        # know which run/artifact carries it.
        workflow_run = _parse(WorkflowRunEvent, event_name, payload)
        raise WorkflowRunNotImplemented(workflow_run.workflow_run.id)
    raise UnsupportedEventKind(event_name)
