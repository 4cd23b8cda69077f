"""
Pages Blueprint - The portfolio page
Handles: Hero, about, projects, skills and contact sections, CV download
"""

from flask import Blueprint

pages_bp = Blueprint('pages', __name__, url_prefix='')

from . import routes
