from typing import List

from src.conversations.engine import ConversationEngine
from src.infrastructure.logging import get_logger
from src.users.models import LoginResult, Session, UserRole, View

logger = get_logger(__name__)


class AuthService:
    """Role login backed by a configured admin lookup.

    Only the admin role can sign in for now; the other roles are rejected
    with ``role_not_supported``.
    """

    def __init__(self, engine: ConversationEngine, admin_logins: List[str], admin_password: str):
        self.engine = engine
        self.admin_logins = {login.strip().lower() for login in admin_logins if login.strip()}
        self.admin_password = admin_password
        self.session = Session()

    def login(self, role: UserRole, login: str, password: str) -> LoginResult:
        if not login.strip() or not password.strip():
            return LoginResult(ok=False, error="empty_fields")

        if role != UserRole.ADMIN:
            logger.info("login_role_not_supported", role=role.value)
            return LoginResult(ok=False, error="role_not_supported")

        if login.strip().lower() in self.admin_logins and self.admin_password and password == self.admin_password:
            self.session = Session(role=role)
            logger.info("login_succeeded", role=role.value)
            return LoginResult(ok=True, role=role)

        logger.warning("login_failed", role=role.value)
        return LoginResult(ok=False, error="invalid_credentials")

    def logout(self):
        self.session = Session()
        self.engine.reset_session()
        logger.info("logout")

    def open_profile(self):
        self.session.view = View.PROFILE

    def open_settings(self):
        self.session.view = View.SETTINGS

    def back_to_chat(self):
        self.session.view = View.CHAT
