from quart import Blueprint, jsonify, request

from src.container import get_chat_interactor
from src.domain.models import AttachmentKind, SelectedFile
from src.infrastructure.logging import get_logger
from src.web.serializers import serialize_draft

logger = get_logger(__name__)
draft_bp = Blueprint("draft", __name__)


@draft_bp.route("/api/draft", methods=["GET"])
async def get_draft():
    interactor = get_chat_interactor()
    return jsonify(serialize_draft(interactor.get_draft()))


@draft_bp.route("/api/draft", methods=["PUT", "PATCH"])
async def update_draft():
    interactor = get_chat_interactor()
    data = await request.get_json() or {}
    draft = await interactor.set_draft_text(str(data.get("text", "")))
    return jsonify(serialize_draft(draft))


@draft_bp.route("/api/draft/attachments", methods=["POST"])
async def add_attachments():
    interactor = get_chat_interactor()
    form = await request.form
    try:
        kind = AttachmentKind(form.get("kind", AttachmentKind.FILE.value))
    except ValueError:
        return jsonify({"error": "kind must be 'image' or 'file'"}), 400

    uploads = (await request.files).getlist("files")
    if not uploads:
        return jsonify({"error": "No files selected"}), 400

    selected = []
    for upload in uploads:
        content = upload.read()
        selected.append(
            SelectedFile(
                name=upload.filename or "unnamed",
                size=len(content),
                mime_type=upload.mimetype or None,
                content=content,
            )
        )

    attached = await interactor.attach_files(selected, kind)
    logger.info("attachments_uploaded", kind=kind.value, selected=len(selected), attached=len(attached))
    return jsonify({
        "attached": len(attached),
        "dropped": len(selected) - len(attached),
        "draft": serialize_draft(interactor.get_draft()),
    })


@draft_bp.route("/api/draft/attachments/<int:index>", methods=["DELETE"])
async def remove_attachment(index: int):
    interactor = get_chat_interactor()
    await interactor.remove_draft_attachment(index)
    return jsonify(serialize_draft(interactor.get_draft()))
