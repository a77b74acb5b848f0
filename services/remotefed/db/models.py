"""
SQLAlchemy database models for the reference role store.

All models use:
- UUIDv7 primary keys (time-sortable), stored as strings
- snake_case column names
- Plural table names
- UTC timestamps
- Hard deletes (no soft delete columns)

Roles are owned by a container: either a realm (realm role) or a client
(client role). Role names are unique per container.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def generate_uuid7() -> str:
    """Generate a UUIDv7 (time-sortable UUID) as a string."""
    # UUIDv7: timestamp in first 48 bits, version in bits 48-51, random in rest
    import time

    timestamp_ms = int(time.time() * 1000)
    rand_bytes = uuid.uuid4().bytes[6:]

    uuid_bytes = (
        timestamp_ms.to_bytes(6, "big")
        + bytes([0x70 | (rand_bytes[0] & 0x0F)])  # Version 7
        + bytes([0x80 | (rand_bytes[1] & 0x3F)])  # Variant
        + rand_bytes[2:]
    )
    return str(uuid.UUID(bytes=uuid_bytes))


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all models."""


class Realm(Base):
    """Tenant boundary for users, roles and clients."""

    __tablename__ = "realms"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid7)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )


class Client(Base):
    """Application registered within a realm.

    ``client_id`` is the public identifier configured on federation
    providers; ``id`` is internal and owns the client's roles.
    """

    __tablename__ = "clients"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid7)
    realm_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("realms.id", ondelete="CASCADE"), nullable=False
    )
    client_id: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    __table_args__ = (UniqueConstraint("realm_id", "client_id", name="uq_clients_realm_client"),)


class Role(Base):
    """Realm or client role.

    ``container_id`` is the realm id for realm roles and the client's
    internal id for client roles.
    """

    __tablename__ = "roles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid7)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    realm_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("realms.id", ondelete="CASCADE"), nullable=False
    )
    container_id: Mapped[str] = mapped_column(String(36), nullable=False)
    client_role: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    __table_args__ = (
        UniqueConstraint("container_id", "name", name="uq_roles_container_name"),
        Index("ix_roles_realm_id", "realm_id"),
    )

    def __repr__(self) -> str:
        return f"<Role name={self.name!r} client_role={self.client_role}>"


class FederatedRoleMapping(Base):
    """Role granted to a federated user by the host itself.

    Keyed by the composite federated user id; the user has no row of its
    own because the remote system owns the record.
    """

    __tablename__ = "federated_role_mappings"

    realm_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("realms.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    role_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    __table_args__ = (Index("ix_federated_role_mappings_user", "realm_id", "user_id"),)
