from quart import Blueprint, jsonify, request
from src.container import get_auth_service
from src.users.models import UserRole, View
from src.infrastructure.logging import get_logger

logger = get_logger(__name__)
auth_bp = Blueprint("auth", __name__)

_ERROR_STATUS = {
    "empty_fields": 400,
    "role_not_supported": 403,
    "invalid_credentials": 401,
}


@auth_bp.route("/api/auth/login", methods=["POST"])
async def login():
    data = await request.get_json() or {}
    try:
        role = UserRole(data.get("role"))
    except ValueError:
        return jsonify({"error": "unknown_role"}), 400

    result = get_auth_service().login(
        role, str(data.get("login", "")), str(data.get("password", ""))
    )
    if not result.ok:
        return jsonify({"error": result.error}), _ERROR_STATUS.get(result.error, 400)

    return jsonify({"status": "ok", "role": result.role.value})


@auth_bp.route("/api/auth/logout", methods=["POST"])
async def logout():
    get_auth_service().logout()
    return jsonify({"status": "ok"})


@auth_bp.route("/api/auth/session", methods=["GET"])
async def session_info():
    session = get_auth_service().session
    return jsonify(
        {
            "authenticated": session.is_authenticated(),
            "role": session.role.value if session.role else None,
            "view": session.view.value,
        }
    )


@auth_bp.route("/api/auth/view", methods=["POST"])
async def switch_view():
    auth = get_auth_service()
    data = await request.get_json() or {}
    try:
        view = View(data.get("view"))
    except ValueError:
        return jsonify({"error": "unknown_view"}), 400

    if view == View.PROFILE:
        auth.open_profile()
    elif view == View.SETTINGS:
        auth.open_settings()
    else:
        auth.back_to_chat()
    return jsonify({"status": "ok", "view": auth.session.view.value})
