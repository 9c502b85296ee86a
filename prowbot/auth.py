from prowbot.errors import NotInOwnersRole, NotOrgMemberOrCollaborator
from prowbot.membership import is_collaborator, is_org_member
from prowbot.owners import AuthorizationRole, fetch_owners
from prowbot.queries import Client


async def assert_authorized(api: Client, role: AuthorizationRole, login: str) -> None:
    """
    Raise an `AuthorizationError` unless `login` may act as `role`.

    An OWNERS file, when the repository has one, is the only source of truth.
    Org members and collaborators are trusted only when there is no OWNERS file.
    """
    log = api.log.bind(role=role, login=login)

    owners = await fetch_owners(api)
    if owners is not None:
        if login in owners.for_role(role):
            log.info("authorized by owners file")
            return
        raise NotInOwnersRole(login, role)

    if await is_org_member(api, login):
        log.info("authorized as org member")
        return
    if await is_collaborator(api, login):
        log.info("authorized as collaborator")
        return
    raise NotOrgMemberOrCollaborator(login)
