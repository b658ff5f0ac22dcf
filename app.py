"""
WSGI entry point for ``flask --app app run``
"""
import os

from app_factory import create_app

app = create_app(os.environ.get('FLASK_CONFIG', 'default'))
