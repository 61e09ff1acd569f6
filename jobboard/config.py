import os

from dotenv import load_dotenv

load_dotenv()


def _csv(value):
    return [item.strip() for item in value.split(",") if item.strip()]


def _database_url():
    url = os.environ.get("DATABASE_URL")

    # Local fallback
    if not url:
        url = "sqlite:///job_board.db"

    # Fix postgres:// issue
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key")
    PREFERRED_URL_SCHEME = "https"

    # ================= SESSION =================
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = os.environ.get("RENDER") == "true"

    # ================= DATABASE =================
    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # ================= UPLOADS =================
    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER", "upload")
    ALLOWED_AVATAR_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}

    # ================= PROFILES =================
    PROFILE_REQUIRED_FIELDS = _csv(
        os.environ.get(
            "PROFILE_REQUIRED_FIELDS",
            "first_name,last_name,email,role,country,city",
        )
    )
    ADMIN_EMAILS = _csv(os.environ.get("ADMIN_EMAILS", ""))

    # ================= API TOKENS =================
    ACCESS_TOKEN_MAX_AGE = int(os.environ.get("ACCESS_TOKEN_MAX_AGE", 3600))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    WTF_CSRF_ENABLED = False
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SESSION_COOKIE_SECURE = False
    ADMIN_EMAILS = ["admin@example.com"]
    LOG_LEVEL = "DEBUG"
