"""Composite identifiers for federated users.

A federated user id names both the storage provider that owns the record and
the record's id in the remote system: ``f:<provider-id>:<external-id>``.
Ids without the ``f:`` prefix belong to the host's local user store.
"""

from dataclasses import dataclass

FEDERATED_PREFIX = "f:"


@dataclass(frozen=True)
class StorageId:
    """Parsed form of a user id."""

    provider_id: str | None
    external_id: str

    @property
    def is_local(self) -> bool:
        return self.provider_id is None

    @property
    def id(self) -> str:
        if self.provider_id is None:
            return self.external_id
        return federated_id(self.provider_id, self.external_id)

    @classmethod
    def parse(cls, user_id: str) -> "StorageId":
        """Split a user id into provider and external parts.

        The external id may itself contain ``:``; only the first separator
        after the provider id is significant.
        """
        if not user_id.startswith(FEDERATED_PREFIX):
            return cls(provider_id=None, external_id=user_id)
        provider_id, sep, external_id = user_id[len(FEDERATED_PREFIX) :].partition(":")
        if not sep or not provider_id:
            raise ValueError(f"Malformed federated user id: {user_id!r}")
        return cls(provider_id=provider_id, external_id=external_id)


def federated_id(provider_id: str, external_id: str) -> str:
    """Build the host-facing id of a federated user."""
    if not provider_id:
        raise ValueError("provider_id must not be empty")
    return f"{FEDERATED_PREFIX}{provider_id}:{external_id}"
