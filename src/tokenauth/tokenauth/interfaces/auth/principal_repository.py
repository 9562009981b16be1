# ABOUTME: Abstract principal repository interface for resolving token owners
# ABOUTME: Defines the lookup contract the authentication strategy uses to find principals

from abc import ABC, abstractmethod

from tokenauth.models.auth.principal import Principal


class AbstractPrincipalRepository(ABC):
    """
    Abstract lookup of principals by their public lookup key.

    Principals are owned by the host application; this interface is the only
    way the authentication strategy reaches them.
    """

    @abstractmethod
    def find_by_lookup_key(self, lookup_key: str) -> Principal | None:
        """
        Resolve the principal identified by `lookup_key`.

        Args:
            lookup_key (str): The identifier sent in the key header.

        Returns:
            Principal | None: The matching principal, or `None` if none exists.

        Raises:
            StorageError: If the backing store cannot be queried.
        """
        pass
