from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field


@runtime_checkable
class Principal(Protocol):
    """
    Protocol for entities that own authentication tokens.

    A principal is owned by the host application. The token core only reads
    the two identifiers below: `id` scopes the principal's token collection and
    `lookup_key` is what clients send in the key header to name the principal.
    """

    @property
    def id(self) -> str:
        """
        The stable identifier of the principal, used to scope its tokens.
        """
        ...

    @property
    def lookup_key(self) -> str:
        """
        The public identifier clients present alongside a token (e.g. an API key).

        It must be distinct from the token itself.
        """
        ...


class SimplePrincipal(BaseModel):
    """
    Minimal concrete principal used by the in-memory principal repository.
    """

    id: str = Field(min_length=1)
    lookup_key: str = Field(min_length=1)
    metadata: dict[str, Any] = Field(default_factory=dict)
