from flask import Blueprint

admin_bp = Blueprint(
    "admin",
    __name__,
    template_folder="../../templates",
)

from catalog.blueprints.admin import views  # noqa: F401, E402
