"""Flask configuration."""

import os

SECRET_KEY = os.environ.get('SECRET_KEY', 'asdf1234')
SERVER_NAME = os.environ.get('REGISTRY_SERVER_NAME')

LOGLEVEL = int(os.environ.get('LOGLEVEL', 20))

JWT_SECRET = os.environ.get('JWT_SECRET', 'foosecret')
"""Secret used to verify bearer tokens that identify the acting user."""

SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI',
                                         'sqlite://')
SQLALCHEMY_TRACK_MODIFICATIONS = False
CREATE_DB = bool(int(os.environ.get('CREATE_DB', 0)))

BCRYPT_ROUNDS = int(os.environ.get('BCRYPT_ROUNDS', 12))
"""Work factor for hashing client secrets. Only lower this in tests."""
