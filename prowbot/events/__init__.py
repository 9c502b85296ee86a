from prowbot.events.issue_comment import IssueCommentEvent  # noqa: F401
from prowbot.events.pull_request_review import PullRequestReviewEvent  # noqa: F401
from prowbot.events.workflow_run import WorkflowRunEvent  # noqa: F401
