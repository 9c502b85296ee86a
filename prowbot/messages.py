def get_markdown_for_approve_denied(error: Exception) -> str:
    return f"Cannot approve the pull request: {error}"


def get_markdown_for_lgtm_denied(error: Exception) -> str:
    return f"Cannot apply the lgtm label because {error}"


def get_review_dismissal_message(*, bot_name: str, commenter: str) -> str:
    return f"Canceled through {bot_name} by @{commenter}"
