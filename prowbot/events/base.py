import pydantic


class Owner(pydantic.BaseModel):
    login: str


class Repository(pydantic.BaseModel):
    name: str
    owner: Owner


class GithubEvent(pydantic.BaseModel):
    action: str
    repository: Repository
