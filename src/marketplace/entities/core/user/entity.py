"""User domain entity."""

from typing import Any

from pydantic import Field

from src.marketplace.entities.core._base import Entity


class User(Entity):
    """User account. Registration happens outside this service.

    The phone number is the identifier sessions carry and the key used to
    find the vendor a user operates.
    """

    first_name: str = Field(description="User's first name")
    last_name: str = Field(description="User's last name")
    email: str | None = Field(default=None, description="User's email address")
    phone: str | None = Field(default=None, description="User's phone number")
    address: str | None = Field(default=None, description="User's address")

    def __eq__(self, other: Any) -> bool:
        """Compare users by business attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.first_name == other.first_name
            and self.last_name == other.last_name
            and self.email == other.email
            and self.phone == other.phone
        )

    def __hash__(self) -> int:
        return hash((self.id, self.first_name, self.last_name, self.email, self.phone))
