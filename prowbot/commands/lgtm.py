"""
/lgtm adds the `lgtm` label, `/lgtm cancel` removes it.

Merge tooling can use the label to find pull requests that are ready.
"""
from __future__ import annotations

from starlette import status

from prowbot.app_config import ActionConfig
from prowbot.command import get_command_args
from prowbot.commands.base import authorize_or_notify, check_response
from prowbot.errors import CouldNotRemoveLabel, LabelNotPresent, ProwError
from prowbot.messages import get_markdown_for_lgtm_denied
from prowbot.queries import Client
from prowbot.trigger import TriggerEvent

COMMAND = "/lgtm"
LGTM_LABEL = "lgtm"


async def cancel_label(api: Client, *, label: str, pull_number: int) -> None:
    res = await api.delete_label(label, pull_number)
    if res.status_code == status.HTTP_404_NOT_FOUND:
        raise LabelNotPresent(label)
    check_response(res, "issues/remove_label")


async def lgtm(trigger: TriggerEvent, *, api: Client, settings: ActionConfig) -> None:
    log = api.log.bind(command=COMMAND, number=trigger.parent.number)

    await authorize_or_notify(
        api, trigger, role="reviewers", get_message=get_markdown_for_lgtm_denied
    )

    args = get_command_args(COMMAND, trigger.comment.body or "")
    if args and args[0] == "cancel":
        try:
            await cancel_label(api, label=LGTM_LABEL, pull_number=trigger.parent.number)
        except ProwError as e:
            raise CouldNotRemoveLabel(LGTM_LABEL, e) from e
        log.info("removed label", label=LGTM_LABEL)
        return

    res = await api.add_label(LGTM_LABEL, trigger.parent.number)
    check_response(res, "issues/add_labels")
    log.info("added label", label=LGTM_LABEL)
