"""
Generation and hashing of client credentials.

Client IDs (when not chosen by the user) and client secrets are opaque,
URL-safe strings derived from cryptographically secure random bytes. The
number of bytes drawn is the only thing that determines how much entropy a
credential carries, so :const:`CLIENT_ID_BYTES` and
:const:`CLIENT_SECRET_BYTES` should not be lowered.

Client secrets are stored only as salted bcrypt hashes.
"""

import logging
import secrets

import bcrypt
from authlib.common.encoding import urlsafe_b64encode, to_unicode

logger = logging.getLogger(__name__)

CLIENT_ID_BYTES = 10
CLIENT_SECRET_BYTES = 20
BCRYPT_ROUNDS = 12


class RandomSource(object):
    """A source of cryptographically secure random bytes."""

    def token_bytes(self, nbytes: int) -> bytes:
        """Get ``nbytes`` random bytes."""
        return secrets.token_bytes(nbytes)


SYSTEM_RANDOM = RandomSource()


def generate_id(byte_count: int, source: RandomSource = SYSTEM_RANDOM) -> str:
    """
    Generate an opaque, URL-safe identifier.

    Parameters
    ----------
    byte_count : int
        Number of random bytes to draw from ``source``.
    source : :class:`RandomSource`
        Defaults to the system CSPRNG.

    Returns
    -------
    str
        Unpadded base64url encoding of the random bytes. The length depends
        only on ``byte_count``.

    """
    if byte_count < 1:
        raise ValueError('byte_count must be a positive integer')
    return to_unicode(urlsafe_b64encode(source.token_bytes(byte_count)))


def hash_secret(secret: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Generate a salted bcrypt hash of a client secret."""
    hashed: bytes = bcrypt.hashpw(secret.encode('utf-8'),
                                  bcrypt.gensalt(rounds=rounds))
    return hashed.decode('utf-8')


def check_secret(secret: str, hashed: str) -> bool:
    """Check a plaintext client secret against a stored hash."""
    try:
        return bcrypt.checkpw(secret.encode('utf-8'), hashed.encode('utf-8'))
    except ValueError:
        logger.warning('Stored client secret is not a valid bcrypt hash')
        return False
