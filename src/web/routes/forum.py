from dataclasses import asdict
from quart import Blueprint, jsonify
from src.container import get_chat_interactor

forum_bp = Blueprint("forum", __name__)


@forum_bp.route("/api/chats/<chat_id>/topics")
async def list_topics(chat_id: str):
    interactor = get_chat_interactor()
    chat = interactor.get_chat(chat_id)
    if not chat:
        return jsonify({"error": "Chat not found"}), 404

    topics = interactor.get_topics(chat_id)
    return jsonify({"chat": asdict(chat), "topics": [asdict(t) for t in topics]})


@forum_bp.route("/api/topics/<topic_id>/select", methods=["POST"])
async def select_topic(topic_id: str):
    interactor = get_chat_interactor()
    if not await interactor.select_topic(topic_id):
        return jsonify({"error": "Topic not found in selected group"}), 404

    cursor = interactor.get_cursor()
    group = interactor.get_chat(cursor.selected_group_id)
    return jsonify({
        "status": "ok",
        "cursor": asdict(cursor),
        "group_unread": group.unread_count if group else 0,
    })
