"""Account and profile domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

# Profile attributes the mutation workflow may write.
MUTABLE_PROFILE_FIELDS: tuple[str, ...] = ("name", "age", "gender", "profile_image")


@dataclass
class Account:
    """Credential record: one per registered email."""

    email: str
    password_hash: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


@dataclass
class Profile:
    """Descriptive record tied one-to-one to an Account."""

    account_id: UUID
    name: str
    age: int
    gender: str
    profile_image: str | None = None

    def snapshot(self) -> dict[str, object]:
        """Current values of the mutable fields."""
        return {name: getattr(self, name) for name in MUTABLE_PROFILE_FIELDS}


@dataclass
class AccountProfile:
    """Read model joining an Account with its Profile, without credentials."""

    id: UUID
    email: str
    created_at: datetime
    updated_at: datetime
    profile: Profile | None = None
