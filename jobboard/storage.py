import os

from flask import current_app, url_for
from werkzeug.utils import secure_filename

from jobboard.errors import ServiceError


def allowed_file(filename):
    allowed = current_app.config["ALLOWED_AVATAR_EXTENSIONS"]
    return "." in filename and filename.rsplit(".", 1)[1].lower() in allowed


def public_url(path):
    return url_for("main.uploaded_file", filename=path, _external=True)


def upload(path, file):
    """Save ``file`` under ``path`` inside the upload folder and return its public URL."""
    parts = [secure_filename(part) for part in path.split("/")]
    parts = [part for part in parts if part]
    if not parts or not allowed_file(parts[-1]):
        raise ServiceError("Invalid file type", 400)

    directory = os.path.join(current_app.config["UPLOAD_FOLDER"], *parts[:-1])
    os.makedirs(directory, exist_ok=True)
    try:
        file.save(os.path.join(directory, parts[-1]))
    except OSError as exc:
        current_app.logger.error("Upload of %s failed: %s", path, exc)
        raise ServiceError("Could not store the file") from exc

    current_app.logger.info("Stored upload %s", "/".join(parts))
    return public_url("/".join(parts))
