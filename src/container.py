from src.config import get_settings
from src.adapters.clock import WallClock
from src.adapters.file_reader import DataUrlFileReader
from src.application.interactors import ChatInteractor
from src.conversations.engine import ConversationEngine
from src.conversations.roster import build_default_roster
from src.infrastructure.event_bus import EventBus
from src.users.service import AuthService

# Singleton instances
_engine: ConversationEngine | None = None
_event_bus: EventBus | None = None
_interactor: ChatInteractor | None = None
_auth_service: AuthService | None = None

def _get_engine() -> ConversationEngine:
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = ConversationEngine(
            build_default_roster(settings.SELF_NAME),
            DataUrlFileReader(settings.MAX_ATTACHMENT_BYTES),
            WallClock(settings.TIME_FORMAT),
            self_name=settings.SELF_NAME,
        )
    return _engine

def _get_event_bus() -> EventBus:
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus

def get_chat_interactor() -> ChatInteractor:
    global _interactor
    if _interactor is None:
        _interactor = ChatInteractor(_get_engine(), _get_event_bus())
    return _interactor

def get_auth_service() -> AuthService:
    global _auth_service
    if _auth_service is None:
        settings = get_settings()
        _auth_service = AuthService(
            _get_engine(),
            settings.ADMIN_LOGINS,
            settings.ADMIN_PASSWORD,
        )
    return _auth_service
