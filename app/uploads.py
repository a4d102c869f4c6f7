import os
import uuid

from fastapi import UploadFile

from app.config import settings
from app.exceptions import ValidationError

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


def save_image(file: UploadFile, field: str) -> str:
    """
    Store an uploaded image under settings.UPLOAD_DIR.
    Returns the public URL, e.g. /uploads/3f2a....png
    """
    ext = os.path.splitext(file.filename or "")[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise ValidationError(field, "Only image files are allowed")

    content = file.file.read(settings.MAX_UPLOAD_BYTES + 1)
    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise ValidationError(field, "File is too large")

    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    filename = f"{uuid.uuid4().hex}{ext}"
    with open(os.path.join(settings.UPLOAD_DIR, filename), "wb") as f:
        f.write(content)

    return f"/uploads/{filename}"
