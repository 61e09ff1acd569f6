from collections.abc import Mapping


def _value(record, field):
    if isinstance(record, Mapping):
        return record.get(field)
    return getattr(record, field, None)


def _is_blank(value):
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set)):
        return len(value) == 0
    return False


def missing_fields(profile, required):
    """Names from ``required`` whose value in ``profile`` is absent or empty.

    ``profile`` may be a mapping, a model instance or ``None``; a missing
    profile is missing every required field. Order follows ``required``.
    """
    if profile is None:
        return list(required)
    return [field for field in required if _is_blank(_value(profile, field))]


def is_complete(profile, required):
    return not missing_fields(profile, required)
