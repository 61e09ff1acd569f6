from collections.abc import Mapping
from datetime import date, datetime

SEARCH_FIELDS = ("title", "description", "company", "location")


def _value(job, field):
    if isinstance(job, Mapping):
        return job.get(field)
    return getattr(job, field, None)


def _as_date(value):
    if value is None or isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    return value.date()


def is_open(job, today):
    """A posting stays open through the whole of its expiry day."""
    expires = _as_date(_value(job, "expires_at"))
    return expires is None or expires >= today


def public_jobs(jobs, today):
    return [job for job in jobs if _value(job, "status") == "active" and is_open(job, today)]


def matches_search(job, term):
    term = term.lower()
    for field in SEARCH_FIELDS:
        text = _value(job, field)
        if text and term in text.lower():
            return True
    return False


def filter_jobs(jobs, search="", job_type=""):
    """Apply the free-text search and the exact type filter, keeping order."""
    filtered = list(jobs)
    if search:
        filtered = [job for job in filtered if matches_search(job, search)]
    if job_type:
        filtered = [job for job in filtered if _value(job, "type") == job_type]
    return filtered
