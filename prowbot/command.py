from typing import List


def get_command_args(command: str, body: str) -> List[str]:
    """
    Arguments following the first occurrence of `command` in a comment.

    >>> get_command_args("/approve", "/approve cancel")
    ['cancel']
    """
    _, found, rest = body.partition(command)
    if not found:
        return []
    return rest.split()
