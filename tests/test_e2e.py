import asyncio

import pytest
from unittest.mock import AsyncMock
from src.application.interactors import ChatInteractor
from src.domain.models import AttachmentKind, SelectedFile
from src.infrastructure.event_bus import EventBus


@pytest.fixture
def interactor(engine):
    return ChatInteractor(engine, EventBus())


@pytest.mark.asyncio
async def test_end_to_end_conversation_flow(interactor):
    listener = AsyncMock()
    await interactor.subscribe_to_events(listener)

    assert await interactor.select_chat("G1") is True
    assert interactor.get_chat("G1").unread_count == 1

    await interactor.set_draft_text("Trip is on Friday")
    files = [SelectedFile(name="a.pdf", size=1024), SelectedFile(name="b.png", size=2048)]
    attached = await interactor.attach_files(files, AttachmentKind.FILE)
    assert [a.file_name for a in attached] == ["a.pdf", "b.png"]

    message = await interactor.send_message()
    assert message.text == "Trip is on Friday"
    assert [a.file_name for a in message.attachments] == ["a.pdf", "b.png"]
    assert interactor.get_messages()[-1] is message

    toggled = await interactor.toggle_reaction(message.id, "👍")
    assert toggled.get_reaction("👍").count == 1

    event_types = [call.args[0].type for call in listener.await_args_list]
    assert event_types == ["read", "draft_update", "message", "reaction_update"]

    message_event = listener.await_args_list[2].args[0]
    assert message_event.chat_id == "G1"
    assert message_event.topic_id == "T1"
    assert message_event.message_model is message

    # Most recent first
    assert interactor.get_recent_events()[0].type == "reaction_update"


@pytest.mark.asyncio
async def test_failed_commands_publish_nothing(interactor):
    listener = AsyncMock()
    await interactor.subscribe_to_events(listener)

    assert await interactor.select_chat("nope") is False
    assert await interactor.select_topic("T1") is False
    assert await interactor.send_message() is None
    assert await interactor.toggle_reaction(999, "👍") is None
    assert await interactor.remove_draft_attachment(0) is False

    listener.assert_not_awaited()


@pytest.mark.asyncio
async def test_images_selected_together_are_read_concurrently(interactor, file_reader):
    await interactor.select_chat("P1")
    gate = file_reader.hold("first.png")

    async def release_later():
        await asyncio.sleep(0.01)
        gate.set()

    files = [
        SelectedFile(name="first.png", size=10),
        SelectedFile(name="broken.png", size=10),
        SelectedFile(name="second.png", size=10),
    ]
    attached, _ = await asyncio.gather(
        interactor.attach_files(files, AttachmentKind.IMAGE), release_later()
    )

    assert len(attached) == 2
    refs = [a.content_ref for a in interactor.get_draft().attachments]
    assert refs == ["data:image/png;base64,second.png", "data:image/png;base64,first.png"]


@pytest.mark.asyncio
async def test_failing_subscriber_does_not_break_others(interactor):
    broken = AsyncMock(side_effect=RuntimeError("boom"))
    healthy = AsyncMock()
    interactor.event_bus.subscribe(broken)
    interactor.event_bus.subscribe(healthy)

    assert await interactor.select_chat("P1") is True

    healthy.assert_awaited_once()


@pytest.mark.asyncio
async def test_incoming_message_is_published(interactor):
    listener = AsyncMock()
    await interactor.subscribe_to_events(listener)

    message = await interactor.receive_message("T2", "Teacher", "Read chapter 4")

    assert message.is_own is False
    event = listener.await_args.args[0]
    assert event.type == "message"
    assert event.chat_id == "T2"
    assert interactor.get_chat("G1").unread_count == 4
