"""
Preferences Blueprint - Theme and language switching
Handles: State snapshot, theme toggle, language toggle
"""

from flask import Blueprint

preferences_bp = Blueprint('preferences', __name__, url_prefix='/preferences')

from . import routes
