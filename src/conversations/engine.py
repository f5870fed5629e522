import itertools
from dataclasses import replace
from typing import Dict, List, Optional

from src.conversations.components.composer import ComposerComponent
from src.conversations.components.navigation import NavigationComponent
from src.conversations.components.reactions import ReactionComponent
from src.conversations.roster import Roster
from src.domain.models import (
    Attachment,
    AttachmentKind,
    Chat,
    DraftBuffer,
    Message,
    NavigationCursor,
    Reaction,
    SelectedFile,
    Topic,
)
from src.domain.ports import Clock, FileReader
from src.infrastructure.logging import get_logger

logger = get_logger(__name__)


class ConversationEngine:
    """Single-writer container for chats, topics, messages and drafts.

    Every public operation is total: unknown ids and empty sends are logged
    and ignored, nothing is raised to the caller. Mutations are synchronous
    and complete before the next event is handled; image reads in
    ``compose_attachment`` are the only suspension point.
    """

    def __init__(self, roster: Roster, file_reader: FileReader, clock: Clock, self_name: str = "You"):
        self.self_name = self_name
        self.clock = clock
        self.navigation = NavigationComponent(roster.chats, roster.topics)
        self.composer = ComposerComponent(file_reader)
        self.reactions = ReactionComponent(self_name)

        self._threads: Dict[str, List[Message]] = {}
        self._messages: Dict[int, Message] = {}
        self._message_threads: Dict[int, str] = {}
        for thread_key, messages in roster.messages.items():
            for message in messages:
                self._store(thread_key, message)

        start = max(self._messages, default=0) + 1
        self._ids = itertools.count(start)

    # --- Read accessors ---

    @property
    def chats(self) -> List[Chat]:
        return self.navigation.list_chats()

    @property
    def cursor(self) -> NavigationCursor:
        return replace(self.navigation.cursor)

    @property
    def draft(self) -> DraftBuffer:
        draft = self.composer.draft_for(self.navigation.cursor.thread_key)
        return DraftBuffer(text=draft.text, attachments=list(draft.attachments))

    def get_chat(self, chat_id: str) -> Optional[Chat]:
        return self.navigation.get_chat(chat_id)

    def topics_for(self, group_id: str) -> List[Topic]:
        return self.navigation.topics_for(group_id)

    def find_message(self, message_id: int) -> Optional[Message]:
        return self._messages.get(message_id)

    def thread_of(self, message_id: int) -> Optional[str]:
        return self._message_threads.get(message_id)

    def current_thread_messages(self) -> List[Message]:
        thread_key = self.navigation.cursor.thread_key
        if thread_key is None:
            return []
        return list(self._threads.get(thread_key, []))

    # --- Navigation ---

    def select_chat(self, chat_id: str) -> bool:
        return self.navigation.select_chat(chat_id)

    def select_topic(self, topic_id: str) -> bool:
        return self.navigation.select_topic(topic_id)

    # --- Composition ---

    def set_draft_text(self, text: str):
        self.composer.set_text(self.navigation.cursor.thread_key, text)

    async def compose_attachment(self, file: SelectedFile, kind: AttachmentKind) -> Optional[Attachment]:
        # The thread key is captured now, before any read is awaited
        thread_key = self.navigation.cursor.thread_key
        return await self.composer.compose_attachment(thread_key, file, kind)

    def remove_draft_attachment(self, index: int) -> bool:
        return self.composer.remove_attachment(self.navigation.cursor.thread_key, index)

    def send_message(self) -> Optional[Message]:
        thread_key = self.navigation.cursor.thread_key
        if thread_key is None:
            logger.info("send_skipped_no_thread")
            return None

        draft = self.composer.take(thread_key)
        if draft is None:
            logger.info("send_skipped_empty_draft", thread_key=thread_key)
            return None

        message = Message(
            id=next(self._ids),
            sender=self.self_name,
            timestamp=self.clock.now_display(),
            is_own=True,
            text=draft.text if draft.text.strip() else None,
            attachments=list(draft.attachments),
        )
        self._store(thread_key, message)
        self._touch_thread(thread_key, message)
        logger.info(
            "message_sent",
            thread_key=thread_key,
            message_id=message.id,
            attachments=len(message.attachments),
        )
        return message

    def receive_message(
        self,
        thread_key: str,
        sender: str,
        text: Optional[str] = None,
        attachments: Optional[List[Attachment]] = None,
    ) -> Optional[Message]:
        """Appends a message from another participant and counts it as unread
        unless its thread is the one currently open."""
        if not self.navigation.has_thread(thread_key):
            logger.warning("receive_message_unknown_thread", thread_key=thread_key)
            return None

        message = Message(
            id=next(self._ids),
            sender=sender,
            timestamp=self.clock.now_display(),
            is_own=False,
            text=text or None,
            attachments=list(attachments or []),
        )
        self._store(thread_key, message)
        self._touch_thread(thread_key, message)

        if thread_key != self.navigation.cursor.thread_key:
            self.navigation.mark_unread(thread_key)

        logger.info("message_received", thread_key=thread_key, message_id=message.id)
        return message

    # --- Reactions ---

    def toggle_reaction(self, message_id: int, emoji: str) -> Optional[Reaction]:
        message = self._messages.get(message_id)
        if message is None:
            logger.warning("toggle_reaction_message_not_found", message_id=message_id, emoji=emoji)
            return None
        return self.reactions.toggle(message, emoji)

    # --- Session ---

    def reset_session(self):
        self.navigation.reset()
        self.composer.reset()
        logger.info("session_reset")

    def _store(self, thread_key: str, message: Message):
        self._threads.setdefault(thread_key, []).append(message)
        self._messages[message.id] = message
        self._message_threads[message.id] = thread_key

    def _touch_thread(self, thread_key: str, message: Message):
        preview = message.get_preview_text()
        topic = self.navigation.get_topic(thread_key)
        if topic is not None:
            topic.last_message_preview = preview
            topic.last_timestamp = message.timestamp
            chat = self.navigation.get_chat(topic.parent_chat_id)
        else:
            chat = self.navigation.get_chat(thread_key)

        if chat is None:
            return
        if chat.is_group and not message.is_own:
            preview = f"{message.sender}: {preview}"
        chat.last_message_preview = preview
        chat.last_timestamp = message.timestamp
