import pytest

from prowbot.errors import (
    MalformedPayload,
    UnsupportedEventKind,
    WorkflowRunNotImplemented,
)
from prowbot.tests.fixtures import (
    OWNER,
    REPO,
    create_issue_comment_payload,
    create_review_payload,
    create_workflow_run_payload,
)
from prowbot.trigger import (
    Comment,
    IssueCommentTrigger,
    Parent,
    PullRequestReviewTrigger,
    normalize_event,
    parent_kind,
)


def test_normalize_issue_comment() -> None:
    trigger = normalize_event(
        "issue_comment",
        create_issue_comment_payload("/lgtm", login="bob", number=12),
    )
    assert trigger == IssueCommentTrigger(
        owner=OWNER,
        repo=REPO,
        comment=Comment(body="/lgtm", author="bob"),
        parent=Parent(number=12),
    )
    assert parent_kind(trigger) == "issue"


def test_normalize_pull_request_review() -> None:
    trigger = normalize_event(
        "pull_request_review", create_review_payload("/approve", number=3)
    )
    assert isinstance(trigger, PullRequestReviewTrigger)
    assert trigger.comment == Comment(body="/approve", author="alice")
    assert trigger.parent.number == 3
    assert parent_kind(trigger) == "pull_request"


def test_normalize_keeps_null_body() -> None:
    trigger = normalize_event("pull_request_review", create_review_payload(None))
    assert trigger.comment.body is None


def test_normalize_workflow_run() -> None:
    with pytest.raises(WorkflowRunNotImplemented) as e:
        normalize_event("workflow_run", create_workflow_run_payload(run_id=1234))
    assert e.value.run_id == 1234
    assert "1234" in str(e.value)


@pytest.mark.parametrize("event_name", ["push", "pull_request", "check_run"])
def test_normalize_unsupported_event(event_name: str) -> None:
    with pytest.raises(UnsupportedEventKind) as e:
        normalize_event(event_name, create_issue_comment_payload("/lgtm"))
    assert str(e.value) == f"{event_name} events are not supported"


def test_normalize_missing_event_name() -> None:
    with pytest.raises(UnsupportedEventKind, match="event name is not set"):
        normalize_event("", {})


def test_normalize_malformed_payload() -> None:
    payload = create_issue_comment_payload("/lgtm")
    del payload["issue"]
    with pytest.raises(MalformedPayload) as e:
        normalize_event("issue_comment", payload)
    assert e.value.event_name == "issue_comment"
