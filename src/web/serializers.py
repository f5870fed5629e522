from dataclasses import asdict, is_dataclass
from datetime import datetime

from src.domain.models import DraftBuffer, Message, Reaction, SystemEvent


def json_serializer(obj):
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    raise TypeError(f"Type {type(obj)} not serializable")


def serialize_reaction(reaction: Reaction) -> dict:
    return {"emoji": reaction.emoji, "count": reaction.count, "users": sorted(reaction.users)}


def serialize_message(message: Message) -> dict:
    data = {
        "id": message.id,
        "sender": message.sender,
        "timestamp": message.timestamp,
        "is_own": message.is_own,
        "attachments": [asdict(a) for a in message.attachments],
        "reactions": [serialize_reaction(r) for r in message.reactions],
    }
    if message.text is not None:
        data["text"] = message.text
    return data


def serialize_draft(draft: DraftBuffer) -> dict:
    return {"text": draft.text, "attachments": [asdict(a) for a in draft.attachments]}


def serialize_event(event: SystemEvent) -> dict:
    data = asdict(event)
    data["date"] = event.date.isoformat()
    if event.message_model is not None:
        data["message_model"] = serialize_message(event.message_model)
    return data
