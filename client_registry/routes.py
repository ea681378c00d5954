"""Provides routes for the client registry API."""

import logging

from flask import Blueprint, Response, g, jsonify, request
from werkzeug.exceptions import BadRequest

from .authorization import authenticated
from .controllers import clients

logger = logging.getLogger(__name__)

blueprint = Blueprint('clients', __name__, url_prefix='')


@blueprint.route('/status', methods=['GET'])
def ok() -> tuple:
    """Health check endpoint."""
    return jsonify({'status': 'ok'}), 200


@blueprint.route('/user/<int:user_id>/client', methods=['GET'])
@authenticated
def list_clients(user_id: int) -> Response:
    """List the OAuth2 clients owned by a user."""
    data, status_code, headers = clients.list_clients(g.principal, user_id)
    return jsonify(data), status_code, headers


@blueprint.route('/user/<int:user_id>/client', methods=['POST'])
@authenticated
def create_client(user_id: int) -> Response:
    """Register a new OAuth2 client for a user."""
    if request.is_json:
        payload = request.get_json(silent=True)
        if payload is None:
            raise BadRequest('Could not parse JSON body')
    else:
        payload = request.form.to_dict()
    data, status_code, headers = clients.create_client(
        g.principal, user_id, payload
    )
    return jsonify(data), status_code, headers
