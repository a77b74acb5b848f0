"""Host framework contracts.

The adapter never imports a concrete host. Anything that satisfies these
protocols can be handed to it: the reference SQL store in remotefed.db,
a test double, or a binding to a real identity server.
"""

from collections.abc import Iterable
from typing import Protocol

# Standard user attribute names
USERNAME = "username"
EMAIL = "email"
FIRST_NAME = "firstName"
LAST_NAME = "lastName"


class RoleModel(Protocol):
    """A realm- or client-scoped role."""

    @property
    def name(self) -> str: ...


class RoleContainer(Protocol):
    """Anything that owns roles by name: a realm or a client."""

    def get_role(self, name: str) -> RoleModel | None:
        """Return the role with this name in this scope, or None."""
        ...

    def add_role(self, name: str) -> RoleModel:
        """Create a role with this name in this scope.

        May raise whatever the backing store raises on constraint violations.
        """
        ...


class ClientModel(RoleContainer, Protocol):
    """A registered application within a realm."""

    @property
    def client_id(self) -> str: ...


class RealmModel(RoleContainer, Protocol):
    """The tenant boundary for users, roles and clients."""

    @property
    def name(self) -> str: ...

    def get_client_by_client_id(self, client_id: str) -> ClientModel | None:
        """Look up a client by its public client id. Never creates one."""
        ...


class FederatedStorage(Protocol):
    """Host-side storage for data the remote system does not own."""

    def get_role_mappings_stream(self, realm: RealmModel, user_id: str) -> Iterable[RoleModel]:
        """Role mappings the host itself holds for a federated user."""
        ...


class UserModel(Protocol):
    """The identity capabilities the host consumes from a federated user."""

    @property
    def id(self) -> str: ...

    @property
    def username(self) -> str | None: ...

    @property
    def email(self) -> str | None: ...

    def get_attributes(self) -> dict[str, list[str | None]]: ...

    def get_role_mappings_stream(self) -> tuple[RoleModel, ...]: ...


class CredentialManager(Protocol):
    """Session-scoped credential operations for one user."""

    def is_valid(self, *inputs: object) -> bool: ...


class CredentialManagerFactory(Protocol):
    """Builds a credential manager bound to a realm and a user."""

    def __call__(self, realm: RealmModel, user: UserModel) -> CredentialManager: ...
