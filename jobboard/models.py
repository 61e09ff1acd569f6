from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

from jobboard.schema import PROFILE_FIELDS

db = SQLAlchemy()

ROLES = ("candidate", "admin", "recruiter", "client")

JOB_STATUSES = ("active", "proceso de seleccion")

JOB_TYPES = ("full-time", "part-time", "contract", "freelance", "internship")

APPLICATION_STATUSES = ("pending", "accepted", "rejected")


def utcnow():
    # Naive UTC, so values compare the same before and after a database round trip.
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(db.Model):
    """Account known to the auth service. Everything else lives on Profile."""

    __tablename__ = "user"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password = db.Column(db.String(200), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    # Relationship: one profile per user, keyed by profiles.user_id
    profile = db.relationship("Profile", backref="user", uselist=False, lazy=True)
    # Relationship: a user can have many applications
    applications = db.relationship("Application", backref="user", lazy=True)
    # Relationship: an admin can post many jobs
    jobs_posted = db.relationship("Job", backref="poster", lazy=True)


class Profile(db.Model):
    __tablename__ = "profiles"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), unique=True, nullable=False)
    schema_version = db.Column(db.Integer, nullable=False, default=2)

    first_name = db.Column(db.String(100))
    last_name = db.Column(db.String(100))
    email = db.Column(db.String(120))
    phone = db.Column(db.String(40))
    role = db.Column(db.String(20), default="candidate")
    bio = db.Column(db.Text)
    country = db.Column(db.String(100))
    city = db.Column(db.String(100))
    address = db.Column(db.String(255))
    company = db.Column(db.String(200))
    position = db.Column(db.String(200))

    skills = db.Column(db.JSON, default=list)
    languages = db.Column(db.JSON, default=list)

    avatar_url = db.Column(db.String(500))
    portfolio_url = db.Column(db.String(500))
    linkedin_url = db.Column(db.String(500))
    github_url = db.Column(db.String(500))
    twitter_url = db.Column(db.String(500))
    instagram_url = db.Column(db.String(500))
    tiktok_url = db.Column(db.String(500))
    website_url = db.Column(db.String(500))

    is_complete = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    @property
    def full_name(self):
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @property
    def location(self):
        return ", ".join(part for part in (self.city, self.country) if part)

    def to_dict(self):
        data = {field: getattr(self, field) for field in PROFILE_FIELDS}
        data["id"] = self.id
        data["schema_version"] = self.schema_version
        data["is_complete"] = self.is_complete
        return data


class Job(db.Model):
    __tablename__ = "jobs"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    salary_range = db.Column(db.String(100), nullable=False)
    expires_at = db.Column(db.DateTime)
    status = db.Column(db.String(30), nullable=False, default="active")

    company = db.Column(db.String(200))
    location = db.Column(db.String(100))
    is_remote = db.Column(db.Boolean, nullable=False, default=False)
    type = db.Column(db.String(30))
    requirements = db.Column(db.Text)
    contact_email = db.Column(db.String(120))

    posted_by = db.Column(db.Integer, db.ForeignKey("user.id"))
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # Relationship: a job can have many applications, removed along with it
    applications = db.relationship(
        "Application", backref="job", lazy=True, cascade="all, delete-orphan"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "salary_range": self.salary_range,
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
            "status": self.status,
            "company": self.company,
            "location": self.location,
            "is_remote": self.is_remote,
            "type": self.type,
            "requirements": self.requirements,
            "contact_email": self.contact_email,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class Application(db.Model):
    __tablename__ = "applications"
    __table_args__ = (
        db.UniqueConstraint("job_id", "user_id", name="uq_application_job_user"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False)
    job_id = db.Column(db.Integer, db.ForeignKey("jobs.id"), nullable=False)
    cover_letter = db.Column(db.Text)
    status = db.Column(db.String(20), default="pending")
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self, include_job=False):
        data = {
            "id": self.id,
            "job_id": self.job_id,
            "user_id": self.user_id,
            "cover_letter": self.cover_letter,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if include_job:
            data["job"] = {
                "title": self.job.title,
                "company": self.job.company,
                "location": self.job.location,
            }
        return data
