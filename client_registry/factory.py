"""Application factory for client registry app."""

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException, Forbidden, Unauthorized, \
    BadRequest, MethodNotAllowed, InternalServerError, NotFound, Conflict, \
    UnprocessableEntity, ServiceUnavailable

from .app_logging import setup_logger
from .routes import blueprint
from .services import datastore


def create_web_app() -> Flask:
    """Initialize and configure the client registry application."""
    app = Flask('client_registry')
    app.config.from_pyfile('config.py')
    setup_logger(app.config['LOGLEVEL'])

    datastore.init_app(app)
    app.register_blueprint(blueprint)

    if app.config['CREATE_DB']:
        with app.app_context():
            datastore.create_all()

    register_error_handlers(app)
    return app


def register_error_handlers(app: Flask) -> None:
    """Register error handlers for the Flask app."""
    app.errorhandler(Forbidden)(jsonify_exception)
    app.errorhandler(Unauthorized)(jsonify_exception)
    app.errorhandler(BadRequest)(jsonify_exception)
    app.errorhandler(InternalServerError)(jsonify_exception)
    app.errorhandler(NotFound)(jsonify_exception)
    app.errorhandler(MethodNotAllowed)(jsonify_exception)
    app.errorhandler(Conflict)(jsonify_exception)
    app.errorhandler(UnprocessableEntity)(jsonify_exception)
    app.errorhandler(ServiceUnavailable)(jsonify_exception)


def jsonify_exception(error: HTTPException) -> Response:
    """Render exceptions as JSON."""
    exc_resp = error.get_response()
    response: Response = jsonify(reason=error.description)
    response.status_code = exc_resp.status_code
    return response
