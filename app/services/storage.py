"""Product images kept under MEDIA_ROOT and served from /media/."""
import os
import time
from typing import Optional

from flask import current_app
from werkzeug.utils import secure_filename

from app.exceptions import ValidationError

ALLOWED_EXTENSIONS = {"png", "jpg", "jpeg", "webp", "gif"}


def _extension(filename: str) -> Optional[str]:
    filename = secure_filename(filename or "")
    if "." not in filename:
        return None
    return filename.rsplit(".", 1)[1].lower()


def media_root() -> str:
    return current_app.config["MEDIA_ROOT"]


def save_image(file, folder: str = "products") -> str:
    """Store an uploaded image and return its path relative to MEDIA_ROOT."""
    if file is None or not file.filename:
        raise ValidationError("No file uploaded")
    ext = _extension(file.filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise ValidationError("Unsupported file type")

    relative = f"{folder}/{int(time.time() * 1000)}.{ext}"
    target = os.path.join(media_root(), *relative.split("/"))
    os.makedirs(os.path.dirname(target), exist_ok=True)
    file.save(target)
    return relative


def public_url(path: str) -> str:
    base = current_app.config.get("MEDIA_URL_BASE", "/media/")
    if not base.endswith("/"):
        base += "/"
    return f"{base}{path.lstrip('/')}"
