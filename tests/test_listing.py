from datetime import date, datetime

from jobboard.listing import filter_jobs, is_open, public_jobs

TODAY = date(2026, 5, 10)

JOBS = [
    {"id": 1, "title": "Frontend Developer", "description": "React and CSS", "type": "full-time"},
    {"id": 2, "title": "QA Engineer", "description": "Manual and automated testing", "type": "contract"},
    {"id": 3, "title": "Data Analyst", "description": "SQL, dashboards, developer tooling", "type": "full-time"},
]


def ids(jobs):
    return [job["id"] for job in jobs]


def test_empty_search_keeps_every_job():
    assert filter_jobs(JOBS, "") == JOBS


def test_search_is_case_insensitive_over_title_and_description():
    assert ids(filter_jobs(JOBS, "DEVELOPER")) == [1, 3]
    assert ids(filter_jobs(JOBS, "testing")) == [2]
    assert filter_jobs(JOBS, "nothing like this") == []


def test_search_covers_company_and_location():
    jobs = [
        {"id": 1, "title": "Designer", "description": "", "company": "Acme", "location": "Madrid"},
        {"id": 2, "title": "Designer", "description": "", "company": "Globex", "location": "Lisbon"},
    ]

    assert ids(filter_jobs(jobs, "acme")) == [1]
    assert ids(filter_jobs(jobs, "lisbon")) == [2]


def test_type_filter_is_exact():
    assert ids(filter_jobs(JOBS, job_type="full-time")) == [1, 3]
    assert filter_jobs(JOBS, job_type="full") == []


def test_search_and_type_filters_compose():
    combined = filter_jobs(JOBS, "developer", "full-time")

    assert combined == filter_jobs(filter_jobs(JOBS, "developer"), "", "full-time")
    assert combined == filter_jobs(filter_jobs(JOBS, "", "full-time"), "developer")
    assert ids(combined) == [1, 3]


def test_posting_stays_open_through_its_expiry_day():
    assert is_open({"expires_at": None}, TODAY)
    assert is_open({"expires_at": datetime(2026, 5, 10)}, TODAY)
    assert is_open({"expires_at": "2026-05-11T00:00:00"}, TODAY)
    assert not is_open({"expires_at": datetime(2026, 5, 9, 23, 59)}, TODAY)


def test_public_jobs_are_active_and_open():
    jobs = [
        {"id": 1, "status": "active", "expires_at": datetime(2026, 6, 1)},
        {"id": 2, "status": "proceso de seleccion", "expires_at": datetime(2026, 6, 1)},
        {"id": 3, "status": "active", "expires_at": datetime(2026, 5, 1)},
        {"id": 4, "status": "active", "expires_at": None},
    ]

    assert ids(public_jobs(jobs, TODAY)) == [1, 4]
