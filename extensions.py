"""
Extensions Module - Centralized initialization of Flask extensions
Decouples extensions from the main app.py to avoid circular imports
and enable better testing.
"""

from flask_sqlalchemy import SQLAlchemy
from utils.state import StateRegistry

# Initialize extensions without binding to app
db = SQLAlchemy()
state_registry = StateRegistry()

__all__ = ['db', 'state_registry']
