from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal


@dataclass
class User:
    id: str | None = None
    email: str | None = None
    status: Literal["pending", "active", "locked"] = "pending"
    password_hash: str = ""

    def __post_init__(self):
        if self.email:
            self.email = self.email.strip().lower()
            if not self.email:
                raise ValueError("email cannot be empty")
        else:
            raise ValueError("email is required")

    @property
    def is_pending(self) -> bool:
        return self.status == "pending"


@dataclass(frozen=True)
class ConfirmToken:
    user_id: str
    token: str
    created_at: datetime | None = None
    expires_at: datetime | None = None


@dataclass
class TokenResult:
    """Outcome of a token generation request."""

    valid: bool
    params: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    def param(self, name: str, default: Any = None) -> Any:
        return self.params.get(name, default)

    @classmethod
    def success(cls, token: ConfirmToken) -> "TokenResult":
        return cls(valid=True, params={"token": token})

    @classmethod
    def failure(cls, *errors: str) -> "TokenResult":
        return cls(valid=False, errors=list(errors))
