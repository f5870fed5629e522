from typing import Dict, List, Optional

from src.domain.models import Chat, ChatType, NavigationCursor, Topic
from src.infrastructure.logging import get_logger

logger = get_logger(__name__)


class NavigationComponent:
    """Owns the navigation cursor and the chat/topic unread counters.

    A group's unread count is never stored independently of its topics: every
    operation that touches a topic's counter ends with ``recompute_group_unread``.
    """

    def __init__(self, chats: List[Chat], topics: Dict[str, List[Topic]]):
        self._chats: Dict[str, Chat] = {c.id: c for c in chats}
        self._chat_order: List[str] = [c.id for c in chats]
        self._topics: Dict[str, List[Topic]] = topics
        self._topic_index: Dict[str, Topic] = {
            t.id: t for group_topics in topics.values() for t in group_topics
        }
        self.cursor = NavigationCursor()

        for group_id in self._topics:
            self.recompute_group_unread(group_id)

    def list_chats(self) -> List[Chat]:
        return [self._chats[cid] for cid in self._chat_order]

    def get_chat(self, chat_id: str) -> Optional[Chat]:
        return self._chats.get(chat_id)

    def get_topic(self, topic_id: str) -> Optional[Topic]:
        return self._topic_index.get(topic_id)

    def topics_for(self, group_id: str) -> List[Topic]:
        return list(self._topics.get(group_id, []))

    def has_thread(self, thread_key: str) -> bool:
        return thread_key in self._chats or thread_key in self._topic_index

    def select_chat(self, chat_id: str) -> bool:
        chat = self._chats.get(chat_id)
        if chat is None:
            logger.warning("select_chat_not_found", chat_id=chat_id)
            return False

        self.cursor.selected_chat_id = chat.id
        chat.unread_count = 0

        if chat.type == ChatType.GROUP:
            self.cursor.selected_group_id = chat.id
            self.cursor.selected_topic_id = None
            topics = self._topics.get(chat.id)
            if topics:
                self._open_topic(topics[0])
        else:
            self.cursor.selected_group_id = None
            self.cursor.selected_topic_id = None

        logger.info(
            "chat_selected",
            chat_id=chat.id,
            topic_id=self.cursor.selected_topic_id,
            unread=chat.unread_count,
        )
        return True

    def select_topic(self, topic_id: str) -> bool:
        group_id = self.cursor.selected_group_id
        if group_id is None:
            logger.warning("select_topic_no_group", topic_id=topic_id)
            return False

        topic = self._topic_index.get(topic_id)
        if topic is None or topic.parent_chat_id != group_id:
            logger.warning("select_topic_not_in_group", topic_id=topic_id, group_id=group_id)
            return False

        self._open_topic(topic)
        logger.info("topic_selected", topic_id=topic.id, group_id=group_id)
        return True

    def _open_topic(self, topic: Topic):
        self.cursor.selected_topic_id = topic.id
        topic.unread_count = 0
        self.recompute_group_unread(topic.parent_chat_id)

    def recompute_group_unread(self, group_id: str):
        group = self._chats.get(group_id)
        topics = self._topics.get(group_id)
        if group is None or not topics:
            return
        group.unread_count = sum(t.unread_count for t in topics)

    def mark_unread(self, thread_key: str):
        """Counts one incoming message against the thread's owner."""
        topic = self._topic_index.get(thread_key)
        if topic is not None:
            topic.unread_count += 1
            self.recompute_group_unread(topic.parent_chat_id)
            return

        chat = self._chats.get(thread_key)
        if chat is None:
            return
        # Groups with topics only derive their counter
        if chat.type == ChatType.GROUP and self._topics.get(chat.id):
            return
        chat.unread_count += 1

    def reset(self):
        self.cursor = NavigationCursor()
