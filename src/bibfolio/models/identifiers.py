"""Identifier generation for publications without a citation key."""

import secrets
from collections.abc import Callable

FALLBACK_ID_PREFIX = "pub"


def make_fallback_id_factory(token: str | None = None) -> Callable[[int], str]:
    """Create a fallback id generator scoped to one parse call.

    Every id produced by the returned function shares a random token, and
    the entry index keeps ids distinct within the call. Uniqueness across
    calls is not guaranteed.

    Parameters
    ----------
    token : str | None, optional
        Fixed token to use instead of a random one, by default None.

    Returns
    -------
    Callable[[int], str]
        Function mapping an entry index to an id like ``pub-1a2b3c4d-3``.
    """
    run_token = token or secrets.token_hex(4)

    def _fallback_id(index: int) -> str:
        return f"{FALLBACK_ID_PREFIX}-{run_token}-{index}"

    return _fallback_id


def is_fallback_id(value: str) -> bool:
    """Return True if value looks like a generated fallback id."""
    parts = value.split("-")
    return len(parts) == 3 and parts[0] == FALLBACK_ID_PREFIX and parts[2].isdigit()
