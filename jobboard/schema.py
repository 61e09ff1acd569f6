"""Canonical profile shape and upgrades from the older record layouts.

Version 1 records came in several shapes: some used ``id`` as the user
foreign key, some carried a single ``name``, comma separated ``skills`` and
``languages`` strings, bare social handles and the ``cliente`` / ``user``
role values. Version 2 is the one shape stored in the ``profiles`` table.
"""

PROFILE_SCHEMA_VERSION = 2

PROFILE_FIELDS = (
    "user_id",
    "first_name",
    "last_name",
    "email",
    "phone",
    "role",
    "bio",
    "country",
    "city",
    "address",
    "company",
    "position",
    "skills",
    "languages",
    "avatar_url",
    "portfolio_url",
    "linkedin_url",
    "github_url",
    "twitter_url",
    "instagram_url",
    "tiktok_url",
    "website_url",
)

LIST_FIELDS = ("skills", "languages")

LEGACY_ROLES = {"cliente": "client", "user": "candidate"}

SOCIAL_HANDLES = {
    "instagram_profile": ("instagram_url", "https://instagram.com/{}"),
    "tiktok_profile": ("tiktok_url", "https://tiktok.com/@{}"),
}


def split_list(value):
    """Turn ``"a, b,,c"`` (or a list of such strings) into ``["a", "b", "c"]``."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [item.strip() for item in value if item and item.strip()]


def _split_name(name):
    parts = name.strip().split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]


def migrate_profile(record):
    """Return a copy of ``record`` in the current canonical shape.

    Keys outside :data:`PROFILE_FIELDS` are dropped; ``schema_version`` is
    set to :data:`PROFILE_SCHEMA_VERSION`.
    """
    data = dict(record)

    if data.get("user_id") is None and "id" in data:
        data["user_id"] = data.pop("id")

    if not data.get("first_name") and not data.get("last_name"):
        name = data.get("full_name") or data.get("name")
        if name:
            data["first_name"], data["last_name"] = _split_name(name)

    for field in LIST_FIELDS:
        if field in data:
            data[field] = split_list(data[field])

    for legacy, (field, template) in SOCIAL_HANDLES.items():
        handle = (data.get(legacy) or "").strip().lstrip("@")
        if handle and not data.get(field):
            data[field] = template.format(handle)

    role = data.get("role")
    if role in LEGACY_ROLES:
        data["role"] = LEGACY_ROLES[role]

    migrated = {key: value for key, value in data.items() if key in PROFILE_FIELDS}
    migrated["schema_version"] = PROFILE_SCHEMA_VERSION
    return migrated
