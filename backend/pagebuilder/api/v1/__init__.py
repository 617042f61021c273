from flask import Blueprint

# Create the versioned blueprint
v1_bp = Blueprint("v1", __name__)

# Import route modules so they register with v1_bp
from . import health  # noqa: E402,F401
from . import builder  # noqa: E402,F401
from . import layouts  # noqa: E402,F401
