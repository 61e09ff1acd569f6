from datetime import date, datetime, time

from flask import (
    Blueprint, abort, current_app, flash, redirect, render_template, request,
    send_from_directory, url_for
)

from jobboard import auth, storage
from jobboard.auth import admin_required, current_session, login_required, refresh_session
from jobboard.completeness import missing_fields
from jobboard.errors import AuthError, ServiceError
from jobboard.forms import (
    ApplyForm, AvatarForm, ConfirmForm, JobForm, LoginForm, ProfileForm, SignupForm
)
from jobboard.listing import filter_jobs, is_open, public_jobs
from jobboard.models import JOB_TYPES, utcnow
from jobboard.schema import LIST_FIELDS, split_list
from jobboard.store import get_store

bp = Blueprint("main", __name__)

PROFILE_FORM_FIELDS = (
    "first_name", "last_name", "email", "phone", "role", "country", "city", "bio",
    "skills", "languages", "portfolio_url", "linkedin_url", "github_url", "website_url",
)


# ================= HOME =================
@bp.route("/")
def home():
    return render_template("home.html")


@bp.route("/upload/<path:filename>")
def uploaded_file(filename):
    return send_from_directory(current_app.config["UPLOAD_FOLDER"], filename)


# ================= REGISTER =================
@bp.route("/register", methods=["GET", "POST"])
def register():
    form = SignupForm()
    if form.validate_on_submit():
        try:
            auth.sign_up(form.email.data, form.password.data)
            auth.sign_in(form.email.data, form.password.data)
        except ServiceError as e:
            flash(str(e), "error")
            return redirect(url_for("main.register"))

        flash("Account created successfully", "success")
        return redirect(url_for("main.edit_profile"))

    return render_template("register.html", form=form)


# ================= LOGIN =================
@bp.route("/login", methods=["GET", "POST"])
def login():
    form = LoginForm()
    if form.validate_on_submit():
        try:
            auth.sign_in(form.email.data, form.password.data)
        except AuthError as e:
            flash(str(e), "error")
            return render_template("login.html", form=form)

        if current_session().is_complete:
            return redirect(url_for("main.jobs"))
        return redirect(url_for("main.edit_profile"))

    return render_template("login.html", form=form)


# ================= LOGOUT =================
@bp.route("/logout")
def logout():
    auth.sign_out()
    return redirect(url_for("main.home"))


# ================= PROFILE =================
@bp.route("/profile")
@login_required
def profile():
    current = current_session()
    applications = get_store().table("applications").select(
        user_id=current.user_id, order_by="created_at", descending=True
    )
    return render_template(
        "profile.html",
        profile=current.profile,
        missing=current.missing,
        applications=applications,
    )


def _form_values(form):
    values = {}
    for name in PROFILE_FORM_FIELDS:
        if name not in form:
            continue
        value = form[name].data
        values[name] = split_list(value) if name in LIST_FIELDS else (value or None)
    return values


@bp.route("/profile/edit", methods=["GET", "POST"])
@login_required
def edit_profile():
    current = current_session()
    data = current.profile.to_dict() if current.profile is not None else {}
    for name in LIST_FIELDS:
        data[name] = ", ".join(data.get(name) or [])

    form = ProfileForm(data=data)
    # Admins keep their role; the select only offers the self-service ones
    if current.is_admin:
        del form.role

    missing = current.missing
    if form.validate_on_submit():
        values = _form_values(form)
        values["user_id"] = current.user_id
        try:
            get_store().table("profiles").upsert(values, on_conflict="user_id")
        except ServiceError as e:
            flash(f"Error saving the profile: {e}", "error")
        else:
            current = refresh_session()
            flash("Profile saved", "success")
            if current.is_complete:
                return redirect(url_for("main.profile"))
            return redirect(url_for("main.edit_profile"))

    if form.is_submitted():
        pending = current.profile.to_dict() if current.profile is not None else {}
        pending.update(_form_values(form))
        missing = missing_fields(pending, current_app.config["PROFILE_REQUIRED_FIELDS"])

    return render_template(
        "profile_edit.html", form=form, avatar_form=AvatarForm(), missing=missing
    )


@bp.route("/profile/avatar", methods=["POST"])
@login_required
def upload_avatar():
    current = current_session()
    form = AvatarForm()
    if not form.validate_on_submit():
        for errors in form.errors.values():
            for error in errors:
                flash(error, "error")
        return redirect(url_for("main.edit_profile"))

    file = form.avatar.data
    ext = file.filename.rsplit(".", 1)[-1].lower()
    path = f"avatars/{current.user_id}-{utcnow():%Y%m%d%H%M%S}.{ext}"
    try:
        url = storage.upload(path, file)
        get_store().table("profiles").upsert(
            {"user_id": current.user_id, "avatar_url": url}, on_conflict="user_id"
        )
    except ServiceError as e:
        flash(f"Error uploading the avatar: {e}", "error")
    else:
        refresh_session()
        flash("Avatar uploaded", "success")
    return redirect(url_for("main.edit_profile"))


# ================= JOBS =================
@bp.route("/jobs")
def jobs():
    search = request.args.get("q", "")
    job_type = request.args.get("type", "")

    postings = get_store().table("jobs").select(status="active", order_by="expires_at")
    postings = filter_jobs(public_jobs(postings, date.today()), search, job_type)

    return render_template(
        "jobs.html", jobs=postings, search=search, job_type=job_type, job_types=JOB_TYPES
    )


def _public_job_or_404(job_id):
    job = get_store().table("jobs").get(id=job_id, status="active")
    if job is None or not is_open(job, date.today()):
        abort(404)
    return job


@bp.route("/jobs/<int:job_id>")
def job_detail(job_id):
    job = _public_job_or_404(job_id)
    current = current_session()
    applied = None
    if current.is_authenticated:
        applied = get_store().table("applications").get(job_id=job.id, user_id=current.user_id)
    return render_template("job_detail.html", job=job, applied=applied)


# ================= APPLY JOB =================
@bp.route("/jobs/<int:job_id>/apply", methods=["GET", "POST"])
@login_required
def apply_job(job_id):
    current = current_session()
    if not current.is_complete:
        flash("Complete your profile before applying", "error")
        return redirect(url_for("main.edit_profile"))

    job = _public_job_or_404(job_id)
    applications = get_store().table("applications")
    if applications.get(job_id=job.id, user_id=current.user_id):
        flash("Already applied", "error")
        return redirect(url_for("main.jobs"))

    form = ApplyForm()
    if form.validate_on_submit():
        try:
            applications.insert({
                "job_id": job.id,
                "user_id": current.user_id,
                "cover_letter": form.cover_letter.data,
            })
        except ServiceError as e:
            flash(f"Error applying: {e}", "error")
        else:
            flash("Application submitted", "success")
            return redirect(url_for("main.jobs"))

    return render_template("apply.html", form=form, job=job)


# ================= ADMIN =================
@bp.route("/admin")
@admin_required
def admin():
    postings = get_store().table("jobs").select(order_by="expires_at")
    return render_template("admin.html", jobs=postings, confirm_form=ConfirmForm())


def _job_values(form):
    return {
        "title": form.title.data,
        "description": form.description.data,
        "salary_range": form.salary_range.data,
        "expires_at": datetime.combine(form.expires_at.data, time.min),
        "status": form.status.data,
        "company": form.company.data or None,
        "location": form.location.data or None,
        "is_remote": form.is_remote.data,
        "type": form.type.data or None,
        "requirements": form.requirements.data or None,
        "contact_email": form.contact_email.data or None,
    }


@bp.route("/admin/jobs/new", methods=["GET", "POST"])
@admin_required
def create_job():
    form = JobForm()
    if form.validate_on_submit():
        values = _job_values(form)
        values["posted_by"] = current_session().user_id
        try:
            get_store().table("jobs").insert(values)
        except ServiceError as e:
            flash(f"Error saving the job: {e}", "error")
        else:
            flash("Job created successfully", "success")
            return redirect(url_for("main.admin"))

    return render_template("job_form.html", form=form, job=None, today=date.today().isoformat())


@bp.route("/admin/jobs/<int:job_id>/edit", methods=["GET", "POST"])
@admin_required
def edit_job(job_id):
    jobs = get_store().table("jobs")
    job = jobs.get(id=job_id)
    if job is None:
        abort(404)

    form = JobForm(obj=job)
    if form.validate_on_submit():
        try:
            jobs.update(job.id, _job_values(form))
        except ServiceError as e:
            flash(f"Error saving the job: {e}", "error")
        else:
            flash("Job updated successfully", "success")
            return redirect(url_for("main.admin"))

    return render_template("job_form.html", form=form, job=job, today=date.today().isoformat())


@bp.route("/admin/jobs/<int:job_id>/delete", methods=["POST"])
@admin_required
def delete_job(job_id):
    if ConfirmForm().validate_on_submit():
        try:
            get_store().table("jobs").delete(job_id)
        except ServiceError as e:
            flash(f"Error deleting the job: {e}", "error")
        else:
            flash("Job deleted", "success")
    return redirect(url_for("main.admin"))


@bp.route("/admin/jobs/<int:job_id>/applications")
@admin_required
def job_applications(job_id):
    job = get_store().table("jobs").get(id=job_id)
    if job is None:
        abort(404)
    applications = get_store().table("applications").select(
        job_id=job.id, order_by="created_at", descending=True
    )
    return render_template(
        "job_applications.html", job=job, applications=applications, confirm_form=ConfirmForm()
    )


def _set_application_status(app_id, status):
    if not ConfirmForm().validate_on_submit():
        abort(400)
    try:
        application = get_store().table("applications").update(app_id, {"status": status})
    except ServiceError as e:
        flash(str(e), "error")
        return redirect(url_for("main.admin"))

    flash(f"Applicant {status}", "success")
    return redirect(url_for("main.job_applications", job_id=application.job_id))


# ================= ACCEPT =================
@bp.route("/admin/applications/<int:app_id>/accept", methods=["POST"])
@admin_required
def accept_applicant(app_id):
    return _set_application_status(app_id, "accepted")


# ================= REJECT =================
@bp.route("/admin/applications/<int:app_id>/reject", methods=["POST"])
@admin_required
def reject_applicant(app_id):
    return _set_application_status(app_id, "rejected")
