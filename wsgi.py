"""
WSGI entry point - exposes the application instance for gunicorn
"""

from app import create_app

app = create_app()
