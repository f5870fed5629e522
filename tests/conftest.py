import asyncio
from typing import Dict

import pytest

from src.conversations.engine import ConversationEngine
from src.conversations.roster import Roster, build_default_roster
from src.domain.models import Chat, ChatType, Message, SelectedFile, Topic
from src.domain.ports import AttachmentReadError, Clock, FileReader


class FixedClock(Clock):
    def __init__(self, value: str = "12:00"):
        self.value = value

    def now_display(self) -> str:
        return self.value


class GatedFileReader(FileReader):
    """Resolves immediately unless a gate is set for the file name.

    Files whose name starts with "broken" fail with AttachmentReadError.
    """

    def __init__(self):
        self.gates: Dict[str, asyncio.Event] = {}

    def hold(self, name: str) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[name] = gate
        return gate

    async def read_as_data_url(self, file: SelectedFile) -> str:
        gate = self.gates.get(file.name)
        if gate is not None:
            await gate.wait()
        if file.name.startswith("broken"):
            raise AttachmentReadError(f"{file.name} is unreadable")
        return f"data:image/png;base64,{file.name}"


def make_scenario_roster() -> Roster:
    """G1 has topics T1 (2 unread) and T2 (1 unread); P1 is private."""
    return Roster(
        chats=[
            Chat(id="G1", name="Class 5A", type=ChatType.GROUP),
            Chat(id="G2", name="Class 6B", type=ChatType.GROUP),
            Chat(id="P1", name="Mom: Anna", type=ChatType.PRIVATE, unread_count=4),
            Chat(id="G3", name="Staff room", type=ChatType.GROUP, unread_count=2),
        ],
        topics={
            "G1": [
                Topic(id="T1", parent_chat_id="G1", name="Important", icon="📌", unread_count=2),
                Topic(id="T2", parent_chat_id="G1", name="Homework", icon="📚", unread_count=1),
            ],
            "G2": [
                Topic(id="U1", parent_chat_id="G2", name="Important", icon="📌", unread_count=5),
                Topic(id="U2", parent_chat_id="G2", name="General", icon="💬", unread_count=0),
            ],
        },
        messages={
            "T1": [Message(id=10, sender="Teacher", timestamp="09:00", is_own=False, text="Field trip")],
            "P1": [Message(id=11, sender="Anna", timestamp="10:00", is_own=False, text="Hello")],
            "U1": [Message(id=12, sender="Teacher", timestamp="11:00", is_own=False, text="Exam")],
        },
    )


@pytest.fixture
def file_reader():
    return GatedFileReader()


@pytest.fixture
def engine(file_reader):
    return ConversationEngine(make_scenario_roster(), file_reader, FixedClock(), self_name="You")


@pytest.fixture
def default_engine(file_reader):
    return ConversationEngine(build_default_roster("You"), file_reader, FixedClock(), self_name="You")
