"""
OAuth2 client registry service

The client registry is a Flask application that lets users register OAuth2
API clients. A registration binds a new client identity (client ID and client
secret) to the user who owns it, along with the grant types the client may use
and the redirect URIs associated with it.

Users may list and register clients on their own behalf. Users who hold the
``admin`` privilege may do so on behalf of any user.

Client secrets are generated server-side and returned exactly once, at
creation time. Only a bcrypt hash of the secret is stored.
"""
