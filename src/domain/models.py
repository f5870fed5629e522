from dataclasses import dataclass, field
from typing import List, Optional, Set
from enum import Enum
from datetime import datetime

class ChatType(str, Enum):
    GROUP = "group"
    PRIVATE = "private"

class AttachmentKind(str, Enum):
    IMAGE = "image"
    FILE = "file"

@dataclass
class Chat:
    id: str
    name: str
    type: ChatType
    unread_count: int = 0
    last_message_preview: Optional[str] = None
    last_timestamp: Optional[str] = None

    @property
    def is_group(self) -> bool:
        return self.type == ChatType.GROUP

@dataclass
class Topic:
    id: str
    parent_chat_id: str
    name: str
    icon: str
    unread_count: int = 0
    last_message_preview: Optional[str] = None
    last_timestamp: Optional[str] = None

@dataclass
class Attachment:
    kind: AttachmentKind
    content_ref: Optional[str] = None  # data URL, images only
    file_name: Optional[str] = None
    file_size: Optional[str] = None

@dataclass
class Reaction:
    emoji: str
    users: Set[str] = field(default_factory=set)

    @property
    def count(self) -> int:
        return len(self.users)

@dataclass
class Message:
    id: int
    sender: str
    timestamp: str  # display string, not orderable
    is_own: bool
    text: Optional[str] = None
    attachments: List[Attachment] = field(default_factory=list)
    reactions: List[Reaction] = field(default_factory=list)

    def get_reaction(self, emoji: str) -> Optional[Reaction]:
        return next((r for r in self.reactions if r.emoji == emoji), None)

    def get_preview_text(self) -> str:
        if self.text:
            return self.text
        if not self.attachments:
            return ""
        first = self.attachments[0]
        if first.kind == AttachmentKind.IMAGE:
            return "Photo"
        return f"File: {first.file_name}"

@dataclass
class SelectedFile:
    """A file picked by the user, as handed over by the presentation layer."""
    name: str
    size: int
    mime_type: Optional[str] = None
    path: Optional[str] = None
    content: Optional[bytes] = None

@dataclass
class NavigationCursor:
    selected_chat_id: Optional[str] = None
    selected_group_id: Optional[str] = None
    selected_topic_id: Optional[str] = None

    @property
    def thread_key(self) -> Optional[str]:
        return self.selected_topic_id or self.selected_chat_id

@dataclass
class DraftBuffer:
    text: str = ""
    attachments: List[Attachment] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.text.strip() and not self.attachments

@dataclass
class SystemEvent:
    type: str  # "read", "message", "reaction_update", "draft_update"
    text: str
    chat_id: Optional[str] = None
    topic_id: Optional[str] = None
    chat_name: Optional[str] = None
    date: datetime = field(default_factory=datetime.now)
    message_model: Optional[Message] = None
