from dataclasses import dataclass, field
from typing import Dict, List

from src.domain.models import Attachment, AttachmentKind, Chat, ChatType, Message, Reaction, Topic


@dataclass
class Roster:
    chats: List[Chat] = field(default_factory=list)
    topics: Dict[str, List[Topic]] = field(default_factory=dict)  # group id -> topics
    messages: Dict[str, List[Message]] = field(default_factory=dict)  # thread key -> messages


def _class_topics(group_id: str, unread: Dict[str, int]) -> List[Topic]:
    return [
        Topic(
            id=f"{group_id}-important",
            parent_chat_id=group_id,
            name="Important",
            icon="📌",
            unread_count=unread.get("important", 0),
        ),
        Topic(
            id=f"{group_id}-homework",
            parent_chat_id=group_id,
            name="Homework",
            icon="📚",
            unread_count=unread.get("homework", 0),
        ),
        Topic(
            id=f"{group_id}-general",
            parent_chat_id=group_id,
            name="General",
            icon="💬",
            unread_count=unread.get("general", 0),
        ),
    ]


def build_default_roster(self_name: str = "You") -> Roster:
    """The fixed roster every session starts from.

    Group unread counts are left at zero here; the engine derives them from
    the topics when it is built.
    """
    chats = [
        Chat(
            id="4",
            name="Dad: Dmitry Kovalev",
            type=ChatType.PRIVATE,
            unread_count=1,
            last_message_preview="Hello! I am a new parent...",
            last_timestamp="16:25",
        ),
        Chat(
            id="1",
            name="Class: Petr Ivanov",
            type=ChatType.GROUP,
            last_message_preview="Homework is done",
            last_timestamp="14:23",
        ),
        Chat(
            id="2",
            name="Mom: Anna Petrova",
            type=ChatType.PRIVATE,
            last_message_preview="Thanks for the information",
            last_timestamp="13:45",
        ),
        Chat(
            id="3",
            name="Class: Maria Smirnova",
            type=ChatType.GROUP,
            last_message_preview="Math teacher: Great work!",
            last_timestamp="Yesterday",
        ),
    ]

    topics = {
        "1": _class_topics("1", {"important": 2, "homework": 1}),
        "3": _class_topics("3", {"general": 1}),
    }

    messages = {
        "4": [
            Message(
                id=1,
                sender="Dmitry Kovalev",
                timestamp="16:25",
                is_own=False,
                text="Hello! I am a new parent, could you tell me the lesson schedule?",
            ),
        ],
        "2": [
            Message(
                id=2,
                sender=self_name,
                timestamp="13:40",
                is_own=True,
                text="The parents' meeting moves to Thursday at 18:00.",
            ),
            Message(
                id=3,
                sender="Anna Petrova",
                timestamp="13:45",
                is_own=False,
                text="Thanks for the information",
                reactions=[Reaction(emoji="👍", users={self_name})],
            ),
        ],
        "1-important": [
            Message(
                id=4,
                sender="Class teacher",
                timestamp="09:10",
                is_own=False,
                text="Tomorrow the class goes to the museum, please sign the permission slip.",
            ),
            Message(
                id=5,
                sender="Class teacher",
                timestamp="09:12",
                is_own=False,
                attachments=[
                    Attachment(kind=AttachmentKind.FILE, file_name="permission_slip.pdf", file_size="84 KB")
                ],
            ),
        ],
        "1-homework": [
            Message(
                id=6,
                sender="Petr Ivanov",
                timestamp="14:23",
                is_own=False,
                text="Homework is done",
                reactions=[Reaction(emoji="❤️", users={"Class teacher"})],
            ),
        ],
        "3-general": [
            Message(
                id=7,
                sender="Math teacher",
                timestamp="Yesterday",
                is_own=False,
                text="Great work!",
            ),
        ],
    }

    return Roster(chats=chats, topics=topics, messages=messages)
