# ABOUTME: In-memory implementation of AbstractPrincipalRepository
# ABOUTME: Resolves principals by lookup key from a thread-safe dictionary

import threading

from tokenauth.exceptions import ValidationException
from tokenauth.interfaces.auth.principal_repository import AbstractPrincipalRepository
from tokenauth.models.auth.principal import Principal


class InMemoryPrincipalRepository(AbstractPrincipalRepository):
    """
    In-memory principal lookup for testing and development.

    Principals are indexed by lookup key. Any object satisfying the `Principal`
    protocol can be registered.
    """

    def __init__(self, principals: list[Principal] | None = None):
        self._principals: dict[str, Principal] = {}
        self._lock = threading.RLock()
        for principal in principals or []:
            self.add(principal)

    def add(self, principal: Principal) -> None:
        """
        Register a principal under its lookup key.

        Raises:
            ValidationException: If another principal already uses the key.
        """
        with self._lock:
            existing = self._principals.get(principal.lookup_key)
            if existing is not None and existing.id != principal.id:
                raise ValidationException(
                    "Lookup key already belongs to another principal",
                    code="DUPLICATE_LOOKUP_KEY",
                    details={"principal_id": principal.id},
                )
            self._principals[principal.lookup_key] = principal

    def remove(self, lookup_key: str) -> None:
        with self._lock:
            self._principals.pop(lookup_key, None)

    def find_by_lookup_key(self, lookup_key: str) -> Principal | None:
        with self._lock:
            return self._principals.get(lookup_key)
