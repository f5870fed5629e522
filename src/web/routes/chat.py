from dataclasses import asdict
from quart import Blueprint, request, jsonify
from src.container import get_chat_interactor
from src.web.serializers import serialize_message

chat_bp = Blueprint('chat', __name__)

@chat_bp.route("/api/chats")
async def list_chats():
    interactor = get_chat_interactor()
    chats = interactor.get_chats()
    return jsonify({
        "chats": [asdict(c) for c in chats],
        "cursor": asdict(interactor.get_cursor()),
    })

@chat_bp.route("/api/chats/<chat_id>/select", methods=["POST"])
async def select_chat(chat_id: str):
    interactor = get_chat_interactor()
    if not await interactor.select_chat(chat_id):
        return jsonify({"error": "Chat not found"}), 404
    return jsonify({"status": "ok", "cursor": asdict(interactor.get_cursor())})

@chat_bp.route("/api/messages", methods=["GET"])
async def current_messages():
    interactor = get_chat_interactor()
    messages = interactor.get_messages()
    return jsonify({
        "messages": [serialize_message(m) for m in messages],
        "count": len(messages),
    })

@chat_bp.route("/api/messages", methods=["POST"])
async def send_message():
    interactor = get_chat_interactor()
    message = await interactor.send_message()
    if message is None:
        return "", 204
    return jsonify(serialize_message(message)), 201

@chat_bp.route("/api/messages/<int:message_id>/reactions", methods=["POST"])
async def toggle_reaction(message_id: int):
    interactor = get_chat_interactor()
    data = await request.get_json() or {}
    emoji = data.get("emoji")
    if not emoji:
        return jsonify({"error": "emoji is required"}), 400

    message = await interactor.toggle_reaction(message_id, emoji)
    if message is None:
        return jsonify({"error": "Message not found"}), 404
    return jsonify(serialize_message(message))
