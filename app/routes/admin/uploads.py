import logging
from flask import request
from app.services.storage import save_image, public_url
from app.utils import ok
from . import admin_bp


@admin_bp.route("/uploads", methods=["POST"])
def upload_image():
    path = save_image(request.files.get("file"))
    logging.info("Image stored at %s", path)
    return ok({"path": path, "url": public_url(path)}, message="Image uploaded", status=201)
