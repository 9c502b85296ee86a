"""
/approve creates an "APPROVE" review as the workflow's bot account.

`/approve cancel` dismisses the bot's latest approval.
"""
from __future__ import annotations

from typing import List, Optional

from prowbot.app_config import ActionConfig
from prowbot.command import get_command_args
from prowbot.commands.base import authorize_or_notify, check_response
from prowbot.errors import (
    CouldNotCancelReview,
    CouldNotCreateReview,
    NoReviewToCancel,
    ProwError,
)
from prowbot.messages import (
    get_markdown_for_approve_denied,
    get_review_dismissal_message,
)
from prowbot.queries import Client, Review
from prowbot.trigger import TriggerEvent

COMMAND = "/approve"
APPROVED = "APPROVED"


def find_latest_approval(reviews: List[Review], bot_login: str) -> Optional[Review]:
    """
    The last approval by the bot in the order GitHub listed the reviews.
    """
    latest = None
    for review in reviews:
        if review.author == bot_login and review.state == APPROVED:
            latest = review
    return latest


async def cancel(
    api: Client, *, pull_number: int, commenter: str, settings: ActionConfig
) -> None:
    log = api.log.bind(pull_number=pull_number)
    log.debug("canceling latest review")
    reviews = await api.list_reviews(pull_number)

    latest = find_latest_approval(reviews, settings.bot_login)
    if latest is None:
        raise NoReviewToCancel()

    res = await api.dismiss_review(
        pull_number=pull_number,
        review_id=latest.id,
        message=get_review_dismissal_message(
            bot_name=settings.bot_name, commenter=commenter
        ),
    )
    check_response(res, "pulls/dismiss_review")
    log.info("dismissed review", review_id=latest.id)


async def approve(
    trigger: TriggerEvent, *, api: Client, settings: ActionConfig
) -> None:
    log = api.log.bind(command=COMMAND, number=trigger.parent.number)
    log.debug("starting approve job")

    await authorize_or_notify(
        api, trigger, role="approvers", get_message=get_markdown_for_approve_denied
    )

    args = get_command_args(COMMAND, trigger.comment.body or "")
    if args and args[0] == "cancel":
        try:
            await cancel(
                api,
                pull_number=trigger.parent.number,
                commenter=trigger.comment.author,
                settings=settings,
            )
        except ProwError as e:
            raise CouldNotCancelReview(e) from e
        return

    log.debug("creating a review")
    res = await api.approve_pull_request(pull_number=trigger.parent.number)
    if res.is_error:
        log.warning("could not create review", res=res)
        raise CouldNotCreateReview.from_response("pulls/create_review", res)
    log.info("approved pull request")
