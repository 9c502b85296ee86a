from __future__ import annotations

from typing import Optional, Sequence

import httpx as http


class ProwError(Exception):
    pass


class ConfigurationError(ProwError):
    pass


class NoCommandsConfigured(ConfigurationError):
    def __init__(self) -> None:
        super().__init__(
            "please provide a list of space delimited commands to run. None found"
        )


class MissingCredential(ConfigurationError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"input required and not supplied: {name}")


class UnsupportedEventKind(ProwError):
    def __init__(self, event_name: str) -> None:
        self.event_name = event_name
        if not event_name:
            msg = "event name is not set for this run"
        else:
            msg = f"{event_name} events are not supported"
        super().__init__(msg)


class MalformedPayload(ProwError):
    def __init__(self, event_name: str, reason: object) -> None:
        self.event_name = event_name
        self.reason = reason
        super().__init__(
            f"event is {event_name} but the payload does not match: {reason}"
        )


class WorkflowRunNotImplemented(ProwError):  # noqa: N818
    def __init__(self, run_id: int) -> None:
        self.run_id = run_id
        super().__init__(
            f"cannot find the review that triggered workflow run {run_id}: "
            "handling workflow_run events is not implemented"
        )


class AuthorizationError(ProwError):
    pass


class NotInOwnersRole(AuthorizationError):  # noqa: N818
    def __init__(self, login: str, role: str) -> None:
        self.login = login
        self.role = role
        super().__init__(f"{login} is not included in the {role} role in the OWNERS file")


class NotOrgMemberOrCollaborator(AuthorizationError):  # noqa: N818
    def __init__(self, login: str) -> None:
        self.login = login
        super().__init__(f"{login} is not a org member or collaborator")


class UpstreamAPIError(ProwError):
    """
    A GitHub API call failed in a way we don't model, e.g. an unexpected status
    code, a response we cannot parse or a transport failure.
    """

    def __init__(
        self,
        operation: str,
        status_code: Optional[int] = None,
        response: bytes = b"",
        detail: Optional[str] = None,
    ) -> None:
        self.operation = operation
        self.status_code = status_code
        self.response = response
        if detail is None:
            detail = f"HTTP status {status_code} and response: {response!r}"
        super().__init__(f"API call {operation!r} failed with {detail}")

    @classmethod
    def from_response(cls, operation: str, res: http.Response) -> UpstreamAPIError:
        return cls(operation, status_code=res.status_code, response=res.content)


class CouldNotCreateReview(UpstreamAPIError):  # noqa: N818
    pass


class MalformedOwnersFile(ProwError):
    def __init__(self, error: object) -> None:
        self.error = error
        super().__init__(f"could not parse the OWNERS file: {error}")


class NoReviewToCancel(ProwError):  # noqa: N818
    def __init__(self) -> None:
        super().__init__("no latest review found to cancel")


class LabelNotPresent(ProwError):  # noqa: N818
    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"label {label!r} is not applied")


class CouldNotCancelReview(ProwError):  # noqa: N818
    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"could not remove latest review: {cause}")


class CouldNotRemoveLabel(ProwError):  # noqa: N818
    def __init__(self, label: str, cause: Exception) -> None:
        self.label = label
        self.cause = cause
        super().__init__(f"could not remove the {label} label: {cause}")


class UnsupportedCommand(ProwError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"could not execute {name}. May not be supported - please refer to docs"
        )


class CommandsFailed(ProwError):  # noqa: N818
    def __init__(self, errors: Sequence[Exception]) -> None:
        self.errors = list(errors)
        super().__init__(
            "error handling review: " + "; ".join(str(e) for e in self.errors)
        )
