"""User database table model."""

from sqlmodel import Field

from src.marketplace.entities.core._base import EntityTable


class UserTable(EntityTable, table=True):
    """Database persistence model for users."""

    __tablename__ = "user"

    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = Field(default=None, index=True)
    address: str | None = None
