"""Sign-up, sign-in and the per-request session.

The session of the current request is built once, in a ``before_request``
hook, and kept on ``flask.g.session``. Views and templates only read that
object; :func:`refresh_session` rebuilds it whenever the signed-in user or
their profile changes.
"""

from dataclasses import dataclass, field
from functools import wraps

from flask import current_app, flash, g, redirect, url_for
from flask import session as cookie_session
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import check_password_hash, generate_password_hash

from jobboard.completeness import missing_fields
from jobboard.errors import AuthError, ServiceError
from jobboard.models import Profile, User, db
from jobboard.store import service_store


@dataclass
class Session:
    user: User = None
    profile: Profile = None
    missing: list = field(default_factory=list)

    @property
    def user_id(self):
        return self.user.id if self.user is not None else None

    @property
    def email(self):
        return self.user.email if self.user is not None else None

    @property
    def role(self):
        return self.profile.role if self.profile is not None else None

    @property
    def is_authenticated(self):
        return self.user is not None

    @property
    def is_admin(self):
        return self.role == "admin"

    @property
    def is_complete(self):
        return self.is_authenticated and not self.missing


def build_session(user_id):
    user = db.session.get(User, user_id) if user_id is not None else None
    if user is None:
        return Session()
    profile = Profile.query.filter_by(user_id=user.id).first()
    required = current_app.config["PROFILE_REQUIRED_FIELDS"]
    return Session(user=user, profile=profile, missing=missing_fields(profile, required))


def refresh_session():
    g.session = build_session(cookie_session.get("user_id"))
    return g.session


def current_session():
    if "session" not in g:
        return refresh_session()
    return g.session


def init_app(app):
    @app.before_request
    def load_session():
        refresh_session()

    @app.context_processor
    def inject_session():
        return {"current": current_session()}


# ================= ACCOUNTS =================
def sign_up(email, password):
    email = email.strip().lower()
    if User.query.filter_by(email=email).first():
        raise ServiceError("User already exists", 400)

    admins = {address.strip().lower() for address in current_app.config["ADMIN_EMAILS"]}
    role = "admin" if email in admins else "candidate"

    # Committed together with the profile insert
    user = User(email=email, password=generate_password_hash(password))
    db.session.add(user)
    try:
        db.session.flush()
        service_store().table("profiles").insert({"user_id": user.id, "email": email, "role": role})
    except (ServiceError, SQLAlchemyError):
        db.session.rollback()
        raise
    current_app.logger.info("Signed up user %s as %s", user.id, role)
    return user


def authenticate(email, password):
    user = User.query.filter_by(email=email.strip().lower()).first()
    if user is None or not check_password_hash(user.password, password):
        raise AuthError("Invalid login credentials")
    return user


def sign_in(email, password):
    user = authenticate(email, password)
    cookie_session.clear()
    cookie_session["user_id"] = user.id
    refresh_session()
    return user


def sign_out():
    cookie_session.clear()
    refresh_session()


# ================= BEARER TOKENS =================
def _serializer():
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt="access-token")


def issue_token(user):
    return _serializer().dumps({"user_id": user.id})


def session_for_token(token):
    try:
        data = _serializer().loads(token, max_age=current_app.config["ACCESS_TOKEN_MAX_AGE"])
    except SignatureExpired:
        raise AuthError("Token expired") from None
    except BadSignature:
        raise AuthError("Invalid token") from None

    session = build_session(data.get("user_id"))
    if not session.is_authenticated:
        raise AuthError("Invalid token")
    return session


# ================= GUARDS =================
def login_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not current_session().is_authenticated:
            return redirect(url_for("main.login"))
        return view(*args, **kwargs)

    return wrapped


def admin_required(view):
    """Hides admin pages from everyone else; the jobs table policy does the enforcing."""

    @wraps(view)
    def wrapped(*args, **kwargs):
        current = current_session()
        if not current.is_authenticated:
            return redirect(url_for("main.login"))
        if not current.is_admin:
            flash("You are not permitted to view this page", "error")
            return redirect(url_for("main.jobs"))
        return view(*args, **kwargs)

    return wrapped
