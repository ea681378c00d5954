"""Web Server Gateway Interface entry-point."""

from client_registry.factory import create_web_app

application = create_web_app()
