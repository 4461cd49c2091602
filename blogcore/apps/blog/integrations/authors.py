"""Author identities.

Posts either point at an identity from an external user system or carry a
plain ``username``. Which one applies is resolved once per post.
"""

from typing import Dict, Iterable, Optional, Protocol, Union

from pydantic import BaseModel, ConfigDict


class Identity(BaseModel):
    """Read-only view of a user owned by the identity provider."""

    model_config = ConfigDict(frozen=True)

    id: int
    username: str


class AttachedAuthor(BaseModel):
    model_config = ConfigDict(frozen=True)

    identity: Identity

    @property
    def username(self) -> str:
        return self.identity.username


class FallbackAuthor(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: Optional[str] = None


Author = Union[AttachedAuthor, FallbackAuthor]


class AuthorProvider(Protocol):
    def get_identity(self, user_id: int) -> Optional[Identity]: ...


class StaticAuthorProvider:
    """Identity provider backed by a fixed set of identities."""

    def __init__(self, identities: Iterable[Identity] = ()):
        self._identities: Dict[int, Identity] = {i.id: i for i in identities}

    def add(self, identity: Identity) -> Identity:
        self._identities[identity.id] = identity
        return identity

    def get_identity(self, user_id: int) -> Optional[Identity]:
        return self._identities.get(user_id)


def resolve_author(
    user_id: Optional[int],
    username: Optional[str],
    provider: Optional[AuthorProvider] = None,
) -> Author:
    if provider is not None and user_id is not None:
        identity = provider.get_identity(user_id)
        if identity is not None:
            return AttachedAuthor(identity=identity)
    return FallbackAuthor(username=username)
