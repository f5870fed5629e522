from dataclasses import dataclass
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    ADMIN = "admin"
    TEACHER = "teacher"
    PARENT = "parent"
    STUDENT = "student"


class View(str, Enum):
    CHAT = "chat"
    PROFILE = "profile"
    SETTINGS = "settings"


@dataclass
class Session:
    role: Optional[UserRole] = None
    view: View = View.CHAT

    def is_authenticated(self) -> bool:
        return self.role is not None


@dataclass
class LoginResult:
    ok: bool
    role: Optional[UserRole] = None
    error: Optional[str] = None  # "empty_fields", "invalid_credentials", "role_not_supported"
