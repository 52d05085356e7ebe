import os
import uuid

from flask import current_app
from werkzeug.datastructures import FileStorage

from aerobook.utils.errors import ApiError


ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".gif"}

PROFILE_PICTURES = "profile-pictures"
FLIGHT_IMAGES = "flights"


def _uploads_root() -> str:
    upload_dir = current_app.config.get("UPLOADS_DIR")
    if not upload_dir:
        raise ApiError("Configuración de uploads no disponible", 500)
    return upload_dir


def save_image(archivo: FileStorage, subdir: str, prefix: str) -> str:
    """Guarda la imagen y devuelve la ruta relativa pública (/uploads/<subdir>/<archivo>)."""

    original = archivo.filename or ""
    _, ext = os.path.splitext(original)
    ext = (ext or "").lower()
    mimetype = archivo.mimetype or ""
    if ext not in ALLOWED_IMAGE_EXTENSIONS or not mimetype.startswith("image/"):
        raise ApiError("Solo se permiten archivos de imagen (jpg, jpeg, png, webp, gif).", 400)

    target_dir = os.path.join(_uploads_root(), subdir)
    os.makedirs(target_dir, exist_ok=True)

    filename = f"{prefix}-{uuid.uuid4().hex}{ext}"
    archivo.save(os.path.join(target_dir, filename))
    return f"/uploads/{subdir}/{filename}"


def remove_upload(relative_path: str | None) -> None:
    """Borra un archivo subido. Los fallos se registran y no cortan la request."""

    if not relative_path:
        return
    prefix = "/uploads/"
    if not relative_path.startswith(prefix):
        return

    parts = relative_path[len(prefix):].split("/")
    if len(parts) != 2:
        return
    subdir, filename = parts[0], os.path.basename(parts[1])

    try:
        file_path = os.path.join(_uploads_root(), subdir, filename)
        if os.path.isfile(file_path):
            os.remove(file_path)
        else:
            current_app.logger.info("Archivo a limpiar no existe: %s", relative_path)
    except (OSError, ApiError) as err:
        current_app.logger.warning("No se pudo eliminar %s: %s", relative_path, err)
