"""
Script for registering a new OAuth2 client. For dev/test purposes only.

.. warning: DO NOT USE THIS ON A PRODUCTION DATABASE.

"""

import click

from client_registry.domain import Principal, NewClientRequest
from client_registry.exceptions import RegistryError
from client_registry.factory import create_web_app
from client_registry.registration import RegistrationService
from client_registry.services import datastore

DEFAULT_GRANT_TYPES = 'client_credentials authorization_code'


@click.command()
@click.option('--user-id', prompt='ID of the user who owns the client',
              type=int)
@click.option('--client-id', default='',
              help='Leave empty to generate a client ID')
@click.option('--grant-types', prompt='Space-delimited grant types',
              default=DEFAULT_GRANT_TYPES)
@click.option('--redirect-uris', prompt='Space-delimited redirect URIs',
              default='')
def create_client(user_id: int, client_id: str, grant_types: str,
                  redirect_uris: str) -> None:
    """Register a new client on behalf of a user."""
    app = create_web_app()
    with app.app_context():
        datastore.create_all()
        service = RegistrationService.from_datastore()
        try:
            registration = service.create_client(
                Principal(user_id=user_id),
                user_id,
                NewClientRequest(client_id=client_id or None,
                                 allowed_grant_types=grant_types,
                                 redirect_uris=redirect_uris)
            )
        except RegistryError as e:
            raise click.ClickException(e.reason) from e
    click.echo(f'Created client {registration.client.client_id} for user'
               f' {user_id} with secret {registration.client_secret}')


if __name__ == '__main__':
    create_client()
