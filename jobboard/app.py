import os

from flask import Flask

from jobboard import api, auth, views
from jobboard.config import Config
from jobboard.models import db


def create_app(config_object=Config, **overrides):
    # ================= APP =================
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.config.update(overrides)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # ================= DATABASE =================
    db.init_app(app)

    # ================= UPLOADS =================
    app.config["UPLOAD_FOLDER"] = os.path.abspath(app.config["UPLOAD_FOLDER"])
    os.makedirs(app.config["UPLOAD_FOLDER"], exist_ok=True)

    # ================= SESSION & ROUTES =================
    auth.init_app(app)
    app.register_blueprint(views.bp)
    app.register_blueprint(api.bp)

    with app.app_context():
        db.create_all()

    app.logger.info("Job board ready")
    return app


# ================= RUN =================
if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    create_app().run(host="0.0.0.0", port=port)
