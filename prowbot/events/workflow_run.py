from typing import Optional

import pydantic

from prowbot.events.base import GithubEvent


class WorkflowRun(pydantic.BaseModel):
    id: int
    # name of the event that triggered the run, e.g. "pull_request_review"
    event: str
    conclusion: Optional[str] = None


class WorkflowRunEvent(GithubEvent):
    """
    https://docs.github.com/en/webhooks/webhook-events-and-payloads#workflow_run
    """

    workflow_run: WorkflowRun
