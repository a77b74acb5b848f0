"""Pytest configuration and fixtures."""

from collections.abc import Generator
from dataclasses import dataclass
from typing import Any
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from remotefed.bind import RemoteUserEntity
from remotefed.config import FederationConfig
from remotefed.db.models import Base
from remotefed.db.store import SqlFederatedStorage, SqlRealm, SqlRoleStore

PROVIDER_ID = "remote-users"


@dataclass(eq=False)
class FakeRole:
    """Role double. Compared by identity, like host role objects."""

    name: str
    scope: str


class FakeRoleContainer:
    """In-memory role container with call-recording lookups."""

    def __init__(self, scope: str) -> None:
        self.scope = scope
        self.roles: dict[str, FakeRole] = {}
        self.get_role = MagicMock(side_effect=self.roles.get)
        self.add_role = MagicMock(side_effect=self._add_role)

    def _add_role(self, name: str) -> FakeRole:
        role = FakeRole(name=name, scope=self.scope)
        self.roles[name] = role
        return role


class FakeClient(FakeRoleContainer):
    def __init__(self, client_id: str) -> None:
        super().__init__(f"client:{client_id}")
        self.client_id = client_id


class FakeRealm(FakeRoleContainer):
    def __init__(self, name: str = "acme") -> None:
        super().__init__(f"realm:{name}")
        self.name = name
        self.clients: dict[str, FakeClient] = {}
        self.get_client_by_client_id = MagicMock(side_effect=self.clients.get)

    def add_client(self, client_id: str) -> FakeClient:
        client = FakeClient(client_id)
        self.clients[client_id] = client
        return client


@pytest.fixture
def realm() -> FakeRealm:
    """Create an empty fake realm."""
    return FakeRealm()


@pytest.fixture
def native_roles() -> list[FakeRole]:
    """Roles the host already maps to the federated user."""
    return [FakeRole(name="offline_access", scope="realm:acme")]


@pytest.fixture
def federated_storage(native_roles: list[FakeRole]) -> MagicMock:
    """Federated storage double returning the native role mappings."""
    storage = MagicMock()
    storage.get_role_mappings_stream.side_effect = lambda realm, user_id: iter(native_roles)
    return storage


@pytest.fixture
def credential_manager_factory() -> MagicMock:
    """Factory producing a distinct credential manager per call."""
    return MagicMock(side_effect=lambda realm, user: MagicMock(name="credential_manager"))


@pytest.fixture
def remote_user() -> RemoteUserEntity:
    """Create a fully populated remote user record."""
    return RemoteUserEntity(
        id="42",
        userName="alice",
        email="alice@example.com",
        emailVerified=True,
        firstName="Alice",
        lastName="Liddell",
        roles=["editor", "viewer"],
        attributes={"department": "engineering", "locale": "en"},
    )


@pytest.fixture
def make_adapter(
    realm: FakeRealm,
    federated_storage: MagicMock,
    credential_manager_factory: MagicMock,
    remote_user: RemoteUserEntity,
):
    """Build adapters over the fake host with per-test config."""
    from remotefed.adapter import RemoteUserAdapter

    def _make(
        config: FederationConfig | None = None,
        user: RemoteUserEntity | None = None,
        **kwargs: Any,
    ) -> RemoteUserAdapter:
        kwargs.setdefault("federated_storage", federated_storage)
        kwargs.setdefault("credential_manager_factory", credential_manager_factory)
        return RemoteUserAdapter(
            config or FederationConfig(),
            kwargs.pop("realm", realm),
            PROVIDER_ID,
            user or remote_user,
            **kwargs,
        )

    return _make


# --- SQL store fixtures ---


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine with all tables."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session]:
    """Create database session for testing."""
    factory = sessionmaker(engine, expire_on_commit=False, autoflush=False)
    with factory() as session:
        yield session
        session.rollback()


@pytest.fixture
def sql_realm(db_session: Session) -> SqlRealm:
    """Create a realm in the SQL store."""
    return SqlRoleStore(db_session).create_realm("acme")


@pytest.fixture
def sql_federated_storage(db_session: Session) -> SqlFederatedStorage:
    return SqlFederatedStorage(db_session)
