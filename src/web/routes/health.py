from quart import Blueprint, jsonify
from src.container import get_chat_interactor, get_auth_service
from src.web.sse import connected_queues

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
async def health_check():
    interactor = get_chat_interactor()
    session = get_auth_service().session

    return jsonify(
        {
            "status": "healthy",
            "chats": len(interactor.get_chats()),
            "authenticated": session.is_authenticated(),
            "sse_clients": len(connected_queues),
        }
    )
