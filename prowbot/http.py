from __future__ import annotations

import ssl
from typing import Optional

from httpx import (
    AsyncBaseTransport,
    AsyncClient,
    HTTPError,
    HTTPStatusError,
    MockTransport,
    Request,
    Response,
)
from httpx._types import TimeoutTypes

__all__ = [
    "Response",
    "Request",
    "HTTPError",
    "HttpClient",
    "HTTPStatusError",
    "MockTransport",
]

context = ssl.create_default_context()


class HttpClient(AsyncClient):
    """
    HTTP Client with the SSL config cached at the module level to avoid perf issues.
    see: https://github.com/encode/httpx/issues/838

    Redirects are not followed: the org membership endpoint answers with a 302
    when the token cannot see private membership and we treat that as "no".
    """

    def __init__(
        self,
        *,
        timeout: TimeoutTypes = None,
        transport: Optional[AsyncBaseTransport] = None,
    ):

        super().__init__(
            verify=context,
            timeout=timeout,
            transport=transport,
            follow_redirects=False,
        )
