import asyncio
from typing import List, Optional, Callable, Awaitable
from collections import deque
from src.conversations.engine import ConversationEngine
from src.domain.models import (
    Attachment,
    AttachmentKind,
    Chat,
    DraftBuffer,
    Message,
    NavigationCursor,
    SelectedFile,
    SystemEvent,
    Topic,
)
from src.infrastructure.event_bus import EventBus

class ChatInteractor:
    def __init__(self, engine: ConversationEngine, event_bus: EventBus):
        self.engine = engine
        self.event_bus = event_bus
        self.recent_events = deque(maxlen=5)

    def get_chats(self) -> List[Chat]:
        return self.engine.chats

    def get_chat(self, chat_id: str) -> Optional[Chat]:
        return self.engine.get_chat(chat_id)

    def get_topics(self, group_id: str) -> List[Topic]:
        return self.engine.topics_for(group_id)

    def get_cursor(self) -> NavigationCursor:
        return self.engine.cursor

    def get_draft(self) -> DraftBuffer:
        return self.engine.draft

    def get_messages(self) -> List[Message]:
        return self.engine.current_thread_messages()

    async def select_chat(self, chat_id: str) -> bool:
        if not self.engine.select_chat(chat_id):
            return False

        chat = self.engine.get_chat(chat_id)
        cursor = self.engine.cursor
        await self.event_bus.publish(
            SystemEvent(
                type="read",
                text="Marked as read",
                chat_id=chat_id,
                topic_id=cursor.selected_topic_id,
                chat_name=chat.name if chat else None,
            )
        )
        return True

    async def select_topic(self, topic_id: str) -> bool:
        if not self.engine.select_topic(topic_id):
            return False

        cursor = self.engine.cursor
        await self.event_bus.publish(
            SystemEvent(
                type="read",
                text="Marked as read",
                chat_id=cursor.selected_group_id,
                topic_id=topic_id,
            )
        )
        return True

    async def set_draft_text(self, text: str) -> DraftBuffer:
        self.engine.set_draft_text(text)
        return self.engine.draft

    async def attach_files(self, files: List[SelectedFile], kind: AttachmentKind) -> List[Attachment]:
        if kind == AttachmentKind.FILE:
            results = [await self.engine.compose_attachment(f, kind) for f in files]
        else:
            # Reads run concurrently, images land in the draft in completion order
            results = await asyncio.gather(
                *(self.engine.compose_attachment(f, kind) for f in files)
            )

        attached = [a for a in results if a is not None]
        if attached:
            await self._publish_draft_update()
        return attached

    async def remove_draft_attachment(self, index: int) -> bool:
        removed = self.engine.remove_draft_attachment(index)
        if removed:
            await self._publish_draft_update()
        return removed

    async def send_message(self) -> Optional[Message]:
        cursor = self.engine.cursor
        message = self.engine.send_message()
        if message is None:
            return None

        await self.event_bus.publish(
            SystemEvent(
                type="message",
                text=message.get_preview_text(),
                chat_id=cursor.selected_chat_id,
                topic_id=cursor.selected_topic_id,
                message_model=message,
            )
        )
        return message

    async def toggle_reaction(self, message_id: int, emoji: str) -> Optional[Message]:
        message = self.engine.find_message(message_id)
        self.engine.toggle_reaction(message_id, emoji)
        if message is None:
            return None

        thread_key = self.engine.thread_of(message_id)
        await self.event_bus.publish(
            SystemEvent(
                type="reaction_update",
                text=emoji,
                chat_id=thread_key,
                message_model=message,
            )
        )
        return message

    async def receive_message(self, thread_key: str, sender: str, text: str) -> Optional[Message]:
        message = self.engine.receive_message(thread_key, sender, text=text)
        if message is None:
            return None

        await self.event_bus.publish(
            SystemEvent(
                type="message",
                text=message.get_preview_text(),
                chat_id=thread_key,
                message_model=message,
            )
        )
        return message

    async def subscribe_to_events(self, callback: Callable[[SystemEvent], Awaitable[None]]):
        async def wrapped_callback(event: SystemEvent):
            self.recent_events.appendleft(event)
            await callback(event)
        self.event_bus.subscribe(wrapped_callback)

    def get_recent_events(self) -> List[SystemEvent]:
        return list(self.recent_events)

    async def _publish_draft_update(self):
        cursor = self.engine.cursor
        await self.event_bus.publish(
            SystemEvent(
                type="draft_update",
                text="",
                chat_id=cursor.selected_chat_id,
                topic_id=cursor.selected_topic_id,
            )
        )
