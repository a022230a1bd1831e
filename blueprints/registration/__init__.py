"""Registration blueprint – public entry form, submissions and stored uploads."""
from flask import Blueprint

registration_bp = Blueprint('registration', __name__)

from . import routes  # noqa: E402,F401
