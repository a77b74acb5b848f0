"""Pydantic model of a user record as served by the remote user API."""

from pydantic import BaseModel, ConfigDict, Field


class RemoteUserEntity(BaseModel):
    """A user record owned by the remote system.

    Wire names follow the remote API (camelCase); Python field names are
    accepted too. Only ``username`` is ever written by this package, and only
    in memory.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
    )

    id: str = Field(..., min_length=1, description="Stable identifier in the remote system")
    username: str | None = Field(default=None, alias="userName")
    email: str | None = Field(default=None)
    email_verified: bool = Field(default=False, alias="emailVerified")
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    roles: list[str] = Field(default_factory=list, description="Role names, in remote order")
    attributes: dict[str, str | None] = Field(
        default_factory=dict, description="Custom single-valued attributes"
    )
