import os
from flask import Flask, redirect, url_for
from dotenv import load_dotenv

load_dotenv()


def create_app(config_name=None):
    flask_app = Flask(__name__)

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV")
        if not config_name:
            # Default to production on managed platforms to avoid accidental
            # debug mode/weak defaults when env selection is omitted.
            if os.environ.get("RAILWAY_ENVIRONMENT") or os.environ.get("PORT"):
                config_name = "production"
            else:
                config_name = "development"

    from catalog.config import config_map

    config_cls = config_map.get(config_name, config_map["development"])
    flask_app.config.from_object(config_cls)

    # Uploads live under the public static folder unless configured elsewhere
    if not flask_app.config["IMAGE_ROOT"]:
        flask_app.config["IMAGE_ROOT"] = os.path.join(flask_app.static_folder, "img")

    if hasattr(config_cls, "init_app"):
        config_cls.init_app(flask_app)

    # Initialize extensions
    from catalog.extensions import db, migrate

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)

    # Import models so Alembic sees them
    from catalog.models import Category, Product, ProductImage  # noqa: F401

    from catalog.csrf import init_csrf

    init_csrf(flask_app)

    # Register blueprints
    from catalog.blueprints.admin import admin_bp

    flask_app.register_blueprint(admin_bp, url_prefix="/admin")

    # Register CLI commands
    from catalog.cli import register_cli

    register_cli(flask_app)

    # Serve static files efficiently in production with WhiteNoise
    if not flask_app.debug:
        from whitenoise import WhiteNoise

        flask_app.wsgi_app = WhiteNoise(
            flask_app.wsgi_app,
            root=os.path.join(flask_app.static_folder),
            prefix="static/",
            max_age=31536000,  # 1 year cache for hashed assets
        )

    @flask_app.route("/")
    def home():
        return redirect(url_for("admin.index"))

    # Health check
    @flask_app.route("/health")
    def health():
        checks = {"status": "ok"}
        try:
            db.session.execute(db.text("SELECT 1"))
            checks["db"] = "ok"
        except Exception:
            flask_app.logger.exception("Health check DB probe failed")
            checks["db"] = "error"
            checks["status"] = "degraded"
        status_code = 200 if checks["status"] == "ok" else 503
        return checks, status_code

    return flask_app
