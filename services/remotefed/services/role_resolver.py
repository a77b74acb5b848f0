"""Role resolution for federated users.

Turns the role names carried on a remote user record into host role objects
and appends them to the user's native role mappings:

1. Start from the host's own role mappings for the user (unchanged)
2. If role augmentation is off, stop there. No client lookup happens.
3. Pick the target scope: the configured resource client if it exists,
   otherwise the realm. Clients are never created.
4. For each remote role name, in record order, get or create the role in
   that scope and append it.

Store failures while creating roles are not caught here.
"""

from collections.abc import Callable, Iterable, Sequence

from remotefed.config import FederationConfig
from remotefed.models import ClientModel, RealmModel, RoleContainer, RoleModel

LogFn = Callable[..., None]


def _noop_log(event: str, **kw: object) -> None:
    return None


def resolve_target_scope(
    realm: RealmModel,
    config: FederationConfig,
    log: LogFn = _noop_log,
) -> tuple[RoleContainer, str]:
    """Return the scope for federation roles and a label naming it.

    The configured resource client wins; the realm is the fallback.
    """
    client = get_resource_client(realm, config, log)
    if client is None:
        return realm, f"realm:{realm.name}"
    return client, f"client:{client.client_id}"


def get_resource_client(
    realm: RealmModel,
    config: FederationConfig,
    log: LogFn = _noop_log,
) -> ClientModel | None:
    """Look up the configured resource client.

    Returns None when no client id is configured or the client does not
    exist in the realm.
    """
    client_id = config.resource_client_id
    if not client_id:
        log("No resource client configured, roles will be added as realm roles")
        return None

    client = realm.get_client_by_client_id(client_id)
    if client is None:
        log(
            "Resource client not found, roles will be added as realm roles",
            client_id=client_id,
            realm=realm.name,
        )
    return client


def get_or_create_role(
    scope: RoleContainer,
    name: str,
    label: str,
    log: LogFn = _noop_log,
) -> RoleModel:
    """Return the named role in scope, creating it if it does not exist."""
    role = scope.get_role(name)
    if role is None:
        role = scope.add_role(name)
        log("Added federation role", role=name, scope=label)
    return role


def resolve_role_mappings(
    realm: RealmModel,
    native_roles: Iterable[RoleModel],
    role_names: Sequence[str],
    config: FederationConfig,
    log: LogFn = _noop_log,
) -> tuple[RoleModel, ...]:
    """Merge native role mappings with roles named by the remote record."""
    mappings: list[RoleModel] = list(native_roles)
    if not config.add_roles_to_token:
        return tuple(mappings)

    scope, label = resolve_target_scope(realm, config, log)
    for name in role_names:
        mappings.append(get_or_create_role(scope, name, label, log))
    return tuple(mappings)
