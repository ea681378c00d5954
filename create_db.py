"""Create all tables in the registry database."""

from client_registry.factory import create_web_app
from client_registry.services import datastore

app = create_web_app()
with app.app_context():
    datastore.create_all()
