import httpx as http
from starlette import status

from prowbot.errors import UpstreamAPIError
from prowbot.queries import Client

# 302: the token can't see private org membership
NOT_A_MEMBER = {
    status.HTTP_302_FOUND,
    status.HTTP_403_FORBIDDEN,
    status.HTTP_404_NOT_FOUND,
}


def _is_member(res: http.Response, operation: str) -> bool:
    if res.status_code == status.HTTP_204_NO_CONTENT:
        return True
    if res.status_code in NOT_A_MEMBER:
        return False
    raise UpstreamAPIError.from_response(operation, res)


async def is_org_member(api: Client, login: str) -> bool:
    """
    Membership of the organization that owns the repository. Always False for
    repositories owned by a user.
    """
    res = await api.check_org_membership(login)
    api.log.debug("org membership", login=login, status=res.status_code)
    return _is_member(res, "orgs/check_membership_for_user")


async def is_collaborator(api: Client, login: str) -> bool:
    res = await api.check_collaborator(login)
    api.log.debug("collaborator", login=login, status=res.status_code)
    return _is_member(res, "repos/check_collaborator")
