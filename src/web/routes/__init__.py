from quart import Quart, jsonify, request

from src.container import get_auth_service
from src.web.routes.auth import auth_bp
from src.web.routes.chat import chat_bp
from src.web.routes.draft import draft_bp
from src.web.routes.forum import forum_bp
from src.web.routes.health import health_bp
from src.web.routes.sse import sse_bp


def register_routes(app: Quart):
    app.register_blueprint(auth_bp)
    app.register_blueprint(chat_bp)
    app.register_blueprint(forum_bp)
    app.register_blueprint(draft_bp)
    app.register_blueprint(sse_bp)
    app.register_blueprint(health_bp)

    @app.before_request
    async def login_required():
        # Allow health and auth routes
        if not request.path.startswith("/api") or request.path.startswith("/api/auth"):
            return

        if not get_auth_service().session.is_authenticated():
            return jsonify({"error": "Not authenticated"}), 401
