"""Realm, client and role store backed by SQLAlchemy.

Implements the host contracts from remotefed.models so the adapter can run
against a real database. Role objects returned here are the ORM rows
themselves; within one session, repeated lookups of the same role return the
same object.

New roles are flushed immediately, so uniqueness violations surface as
``sqlalchemy.exc.IntegrityError`` from ``add_role`` rather than at commit.
"""

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from remotefed.db.models import Client, FederatedRoleMapping, Realm, Role
from remotefed.logging_config import get_logger

logger = get_logger(__name__)


class RealmNotFoundError(LookupError):
    """Raised when a realm name is unknown to the store."""


class _SqlRoleContainer:
    """Roles owned by one container row (a realm or a client)."""

    def __init__(self, db: Session, realm_id: str, container_id: str, client_role: bool) -> None:
        self._db = db
        self._realm_id = realm_id
        self._container_id = container_id
        self._client_role = client_role

    def get_role(self, name: str) -> Role | None:
        return self._db.execute(
            select(Role).where(Role.container_id == self._container_id, Role.name == name)
        ).scalar_one_or_none()

    def add_role(self, name: str) -> Role:
        role = Role(
            name=name,
            realm_id=self._realm_id,
            container_id=self._container_id,
            client_role=self._client_role,
        )
        self._db.add(role)
        self._db.flush()
        logger.debug("Role created", role=name, container_id=self._container_id)
        return role

    def list_roles(self) -> list[Role]:
        result = self._db.execute(
            select(Role).where(Role.container_id == self._container_id).order_by(Role.name)
        )
        return list(result.scalars().all())


class SqlClient(_SqlRoleContainer):
    """A client and its client roles."""

    def __init__(self, db: Session, row: Client) -> None:
        super().__init__(db, row.realm_id, row.id, client_role=True)
        self._row = row

    @property
    def id(self) -> str:
        return self._row.id

    @property
    def client_id(self) -> str:
        return self._row.client_id


class SqlRealm(_SqlRoleContainer):
    """A realm, its realm roles and its clients."""

    def __init__(self, db: Session, row: Realm) -> None:
        super().__init__(db, row.id, row.id, client_role=False)
        self._row = row

    @property
    def id(self) -> str:
        return self._row.id

    @property
    def name(self) -> str:
        return self._row.name

    def get_client_by_client_id(self, client_id: str) -> SqlClient | None:
        row = self._db.execute(
            select(Client).where(Client.realm_id == self._row.id, Client.client_id == client_id)
        ).scalar_one_or_none()
        if row is None:
            return None
        return SqlClient(self._db, row)

    def add_client(self, client_id: str) -> SqlClient:
        row = Client(realm_id=self._row.id, client_id=client_id)
        self._db.add(row)
        self._db.flush()
        logger.info("Client created", realm=self.name, client_id=client_id)
        return SqlClient(self._db, row)


class SqlRoleStore:
    """Entry point for realm lookups within one session."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_realm(self, name: str) -> SqlRealm | None:
        row = self._db.execute(select(Realm).where(Realm.name == name)).scalar_one_or_none()
        if row is None:
            return None
        return SqlRealm(self._db, row)

    def get_realm(self, name: str) -> SqlRealm:
        realm = self.find_realm(name)
        if realm is None:
            raise RealmNotFoundError(f"Realm not found: {name}")
        return realm

    def create_realm(self, name: str) -> SqlRealm:
        row = Realm(name=name)
        self._db.add(row)
        self._db.flush()
        logger.info("Realm created", realm=name)
        return SqlRealm(self._db, row)


class SqlFederatedStorage:
    """Role mappings the host holds for federated users."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def get_role_mappings_stream(self, realm: SqlRealm, user_id: str) -> Iterable[Role]:
        result = self._db.execute(
            select(Role)
            .join(FederatedRoleMapping, FederatedRoleMapping.role_id == Role.id)
            .where(
                FederatedRoleMapping.realm_id == realm.id,
                FederatedRoleMapping.user_id == user_id,
            )
            .order_by(FederatedRoleMapping.created_at, Role.name)
        )
        return result.scalars().all()

    def grant_role(self, realm: SqlRealm, user_id: str, role: Role) -> None:
        """Grant a role to a federated user. Granting twice is a no-op."""
        existing = self._db.get(FederatedRoleMapping, (realm.id, user_id, role.id))
        if existing is not None:
            return
        self._db.add(FederatedRoleMapping(realm_id=realm.id, user_id=user_id, role_id=role.id))
        self._db.flush()
        logger.info("Role granted", realm=realm.name, user_id=user_id, role=role.name)
