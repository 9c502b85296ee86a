from typing import NoReturn


def assert_never(value: NoReturn) -> NoReturn:
    """
    Exhaustiveness check for unions of trigger variants and literal roles.

    mypy flags a call site that can still be reached with a live value.
    """
    raise TypeError(f"unhandled value: {value!r}")
