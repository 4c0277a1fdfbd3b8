from flask import Blueprint, current_app, send_from_directory

media_bp = Blueprint("media", __name__)


@media_bp.route("/media/<path:filename>", methods=["GET"])
def serve_media(filename):
    return send_from_directory(current_app.config["MEDIA_ROOT"], filename)
