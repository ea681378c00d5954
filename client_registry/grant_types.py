"""Validation of the grant types requested for a client."""

from typing import List, Optional

from .domain import GrantType
from .exceptions import UnprocessableInput

SUPPORTED = [grant_type.value for grant_type in GrantType]

MISSING_GRANT_TYPES = 'You must specify the allowedGrantTypes property'
INVALID_GRANT_TYPES = (
    'allowedGrantTypes can only contain supported grant types as a'
    ' space-delimited string. Possible supported options are: '
    + ' '.join(SUPPORTED)
)


def validate(requested: Optional[str]) -> List[GrantType]:
    """
    Parse and validate a space-delimited list of grant types.

    Tokens are matched case-sensitively, and duplicates are retained.

    Parameters
    ----------
    requested : str or None

    Returns
    -------
    list
        Items are :class:`.GrantType` members, in the order requested.

    Raises
    ------
    :class:`.UnprocessableInput`
        If no grant types are given, or if any is not supported.

    """
    tokens = requested.split() if requested else []
    if not tokens:
        raise UnprocessableInput(MISSING_GRANT_TYPES)
    if not all(token in SUPPORTED for token in tokens):
        raise UnprocessableInput(INVALID_GRANT_TYPES)
    return [GrantType(token) for token in tokens]
