"""
Contact Blueprint - Contact form modal
Handles: Opening/closing the modal, field updates, submission to the relay
"""

from flask import Blueprint

contact_bp = Blueprint('contact', __name__, url_prefix='/contact')

from . import routes
