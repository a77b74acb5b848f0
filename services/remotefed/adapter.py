"""Adapter presenting a remote user record as a host user.

One adapter wraps one RemoteUserEntity for the length of a host request.
Identity attributes are read straight from the record; role mappings are the
host's native mappings, optionally extended with roles named by the record
(see remotefed.services.role_resolver).
"""

from collections.abc import Mapping
from typing import Any

from remotefed.bind import RemoteUserEntity
from remotefed.config import FederationConfig, Settings, settings
from remotefed.logging_config import get_logger
from remotefed.models import (
    EMAIL,
    FIRST_NAME,
    LAST_NAME,
    USERNAME,
    CredentialManager,
    CredentialManagerFactory,
    FederatedStorage,
    RealmModel,
    RoleModel,
)
from remotefed.services.role_resolver import resolve_role_mappings
from remotefed.storage import federated_id


class RemoteUserAdapter:
    """A federated user backed by a remote record.

    Args:
        config: Provider settings for the component this user came from.
        realm: Realm the user is being looked up in.
        provider_id: Component id of the federation provider.
        user: The remote record. Only its username is ever mutated.
        federated_storage: Host storage holding the user's native role mappings.
        credential_manager_factory: Builds credential managers for this user.
        logger: Bound logger for diagnostics. Events are only emitted when
            ``config.debug_enabled`` is set.
    """

    def __init__(
        self,
        config: FederationConfig,
        realm: RealmModel,
        provider_id: str,
        user: RemoteUserEntity,
        *,
        federated_storage: FederatedStorage,
        credential_manager_factory: CredentialManagerFactory,
        logger: Any | None = None,
    ) -> None:
        self._config = config
        self._realm = realm
        self._user = user
        self._id = federated_id(provider_id, user.id)
        self._federated_storage = federated_storage
        self._credential_manager_factory = credential_manager_factory
        self._logger = logger if logger is not None else get_logger(__name__)

    def __repr__(self) -> str:
        return f"<RemoteUserAdapter id={self._id!r} username={self.username!r}>"

    @property
    def id(self) -> str:
        return self._id

    @property
    def realm(self) -> RealmModel:
        return self._realm

    @property
    def username(self) -> str | None:
        return self._user.username

    @username.setter
    def username(self, value: str | None) -> None:
        self._user.username = value

    def set_username(self, value: str | None) -> None:
        """Overwrite the username in memory. Nothing is written back remotely."""
        self.username = value

    @property
    def email_verified(self) -> bool:
        return self._user.email_verified

    @property
    def email(self) -> str | None:
        return self._user.email

    @property
    def first_name(self) -> str | None:
        return self._user.first_name

    @property
    def last_name(self) -> str | None:
        return self._user.last_name

    def get_attributes(self) -> dict[str, list[str | None]]:
        """Build the multi-valued attribute map.

        The four standard attributes are always present, each seeded with a
        single value (``None`` when the record lacks it). Custom attributes
        are appended afterwards, so a custom value for a standard key sits
        after the seeded one rather than replacing it.
        """
        attributes: dict[str, list[str | None]] = {
            USERNAME: [self.username],
            EMAIL: [self.email],
            FIRST_NAME: [self.first_name],
            LAST_NAME: [self.last_name],
        }
        for key, value in self._user.attributes.items():
            attributes.setdefault(key, []).append(value)
        return attributes

    def get_attribute_stream(self, name: str) -> tuple[str | None, ...]:
        return tuple(self.get_attributes().get(name, ()))

    def get_first_attribute(self, name: str) -> str | None:
        values = self.get_attributes().get(name)
        if not values:
            return None
        return values[0]

    def credential_manager(self) -> CredentialManager:
        """Return a new credential manager bound to this user."""
        self._log("Creating credential manager", user_id=self._id)
        return self._credential_manager_factory(self._realm, self)

    def get_role_mappings_stream(self) -> tuple[RoleModel, ...]:
        """Native role mappings, followed by federation roles when enabled."""
        native = self._federated_storage.get_role_mappings_stream(self._realm, self._id)
        return resolve_role_mappings(
            self._realm,
            native,
            self._user.roles,
            self._config,
            self._log,
        )

    def _log(self, event: str, **kw: Any) -> None:
        if self._config.debug_enabled:
            self._logger.info(event, **kw)


def build_adapter(
    realm: RealmModel,
    user: RemoteUserEntity,
    *,
    federated_storage: FederatedStorage,
    credential_manager_factory: CredentialManagerFactory,
    component: Mapping[str, Any] | None = None,
    app_settings: Settings | None = None,
    logger: Any | None = None,
) -> RemoteUserAdapter:
    """Build an adapter for a user looked up through this provider.

    The provider id always comes from settings. Provider config comes from
    the host's component settings when given, otherwise from
    ``settings.federation``.
    """
    app_settings = app_settings or settings
    if component is not None:
        config = FederationConfig.from_component(component)
    else:
        config = app_settings.federation
    return RemoteUserAdapter(
        config,
        realm,
        app_settings.provider_id,
        user,
        federated_storage=federated_storage,
        credential_manager_factory=credential_manager_factory,
        logger=logger,
    )
