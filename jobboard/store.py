"""Record store over the ``profiles``, ``jobs`` and ``applications`` tables.

Every write is checked against the table's row-level policy for the caller
the store is bound to. Views get a store bound to the current session;
:func:`service_store` returns one that skips the policies and is only used
after the caller has been checked some other way.
"""

from flask import current_app, g
from sqlalchemy import false
from sqlalchemy.exc import SQLAlchemyError

from jobboard.completeness import is_complete
from jobboard.errors import PolicyError, ServiceError
from jobboard.models import APPLICATION_STATUSES, JOB_STATUSES, Application, Job, Profile, db
from jobboard.schema import migrate_profile


def commit():
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        message = str(getattr(exc, "orig", None) or exc)
        current_app.logger.error("Database write failed: %s", message)
        raise ServiceError(message) from exc


class Table:
    name = None
    model = None

    def __init__(self, store):
        self.store = store

    @property
    def caller(self):
        return self.store.caller

    @property
    def caller_id(self):
        return getattr(self.caller, "user_id", None)

    @property
    def caller_is_admin(self):
        return getattr(self.caller, "role", None) == "admin"

    def readable(self, query):
        return query

    def allows(self, action, row, values):
        return True

    def prepare(self, values, row=None):
        unknown = set(values) - set(self.model.__table__.columns.keys())
        if unknown:
            raise ServiceError(
                f"Could not find the '{sorted(unknown)[0]}' column of '{self.name}'", 400
            )
        return dict(values)

    def check(self, action, row=None, values=None):
        if self.store.elevated or self.allows(action, row, values):
            return
        current_app.logger.warning(
            "Policy denied %s on %s for user %s", action, self.name, self.caller_id
        )
        raise PolicyError(f'new row violates row-level security policy for table "{self.name}"')

    # ================= READ =================
    def select(self, order_by=None, descending=False, **filters):
        query = self.readable(self.model.query.filter_by(**filters))
        if order_by:
            column = getattr(self.model, order_by)
            order = column.desc() if descending else column.asc()
            query = query.order_by(order.nulls_last())
        return query.all()

    def get(self, **filters):
        return self.readable(self.model.query.filter_by(**filters)).first()

    # ================= WRITE =================
    def insert(self, values):
        values = self.prepare(values)
        self.check("insert", values=values)
        row = self.model(**values)
        db.session.add(row)
        commit()
        return row

    def update(self, id, values):
        row = db.session.get(self.model, id)
        if row is None:
            raise ServiceError(f"No row in '{self.name}' with id {id}", 404)
        values = self.prepare(values, row)
        self.check("update", row, values)
        for key, value in values.items():
            setattr(row, key, value)
        commit()
        return row

    def upsert(self, values, on_conflict="id"):
        key = values.get(on_conflict)
        existing = None
        if key is not None:
            existing = self.model.query.filter_by(**{on_conflict: key}).first()
        if existing is not None:
            return self.update(existing.id, values)
        return self.insert(values)

    def delete(self, id):
        """Delete by id; returns the number of rows removed (0 or 1)."""
        row = db.session.get(self.model, id)
        if row is None:
            return 0
        self.check("delete", row)
        db.session.delete(row)
        commit()
        return 1


class ProfilesTable(Table):
    name = "profiles"
    model = Profile

    def prepare(self, values, row=None):
        values = super().prepare(migrate_profile(values), row)
        merged = row.to_dict() if row is not None else {}
        merged.update(values)
        values["is_complete"] = is_complete(merged, current_app.config["PROFILE_REQUIRED_FIELDS"])
        return values

    def upsert(self, values, on_conflict="user_id"):
        # Legacy shapes may carry the conflict key under another name
        return super().upsert(migrate_profile(values), on_conflict)

    def allows(self, action, row, values):
        if self.caller_id is None:
            return False
        if self.caller_is_admin:
            return True
        owner = row.user_id if row is not None else values.get("user_id")
        if owner != self.caller_id:
            return False
        if values and values.get("user_id", owner) != self.caller_id:
            return False
        return not values or values.get("role") != "admin"


class JobsTable(Table):
    name = "jobs"
    model = Job

    def prepare(self, values, row=None):
        values = super().prepare(values, row)
        if "status" in values and values["status"] not in JOB_STATUSES:
            raise ServiceError(f"Invalid job status '{values['status']}'", 400)
        return values

    def allows(self, action, row, values):
        return self.caller_is_admin


class ApplicationsTable(Table):
    name = "applications"
    model = Application

    def readable(self, query):
        if self.store.elevated or self.caller_is_admin:
            return query
        if self.caller_id is None:
            return query.filter(false())
        return query.filter_by(user_id=self.caller_id)

    def prepare(self, values, row=None):
        values = super().prepare(values, row)
        if row is None:
            values.setdefault("status", "pending")
            job_id = values.get("job_id")
            if job_id is None or db.session.get(Job, job_id) is None:
                raise ServiceError(f"Job {job_id} does not exist", 400)
        if "status" in values and values["status"] not in APPLICATION_STATUSES:
            raise ServiceError(f"Invalid application status '{values['status']}'", 400)
        return values

    def allows(self, action, row, values):
        if action == "insert":
            return self.caller_id is not None and values.get("user_id") == self.caller_id
        return self.caller_is_admin


class RecordStore:
    tables = {
        "profiles": ProfilesTable,
        "jobs": JobsTable,
        "applications": ApplicationsTable,
    }

    def __init__(self, caller=None, elevated=False):
        self.caller = caller
        self.elevated = elevated

    def table(self, name):
        try:
            table_class = self.tables[name]
        except KeyError:
            raise ServiceError(f'relation "{name}" does not exist', 404) from None
        return table_class(self)


def get_store():
    """Store bound to the session of the current request."""
    return RecordStore(caller=g.get("session"))


def service_store():
    return RecordStore(elevated=True)
