"""WSGI entry point for Gunicorn (`gunicorn wsgi:app`)."""
from pos_api import create_app

app = create_app()
