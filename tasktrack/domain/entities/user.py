"""User entity."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Literal
from uuid import UUID

UserRole = Literal["individual", "counselor"]

USER_ROLES: tuple[UserRole, ...] = ("individual", "counselor")


@dataclass
class User:
    """A user in the system: either an individual or a counselor."""

    id: UUID
    email: str
    name: str
    role: UserRole = "individual"
    counselor_id: UUID | None = None  # Set for individuals assigned to a counselor
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not self.email:
            raise ValueError("User email is required")
        if not self.name:
            raise ValueError("User name is required")
        if self.role not in USER_ROLES:
            raise ValueError(f"Unknown user role: {self.role}")

    @property
    def is_counselor(self) -> bool:
        return self.role == "counselor"
