"""Shared Access Signature (SAS) tokens for Event Hub requests.

A SAS token proves we hold the policy key without sending the key itself:

    SharedAccessSignature sr=<uri>&sig=<signature>&se=<expiry>&skn=<policy>

- `sr`  the resource URI, query-escaped
- `sig` HMAC-SHA256 over "<sr>\\n<se>" keyed with the policy key,
        base64-encoded and then query-escaped
- `se`  expiry as Unix seconds (now + 7 days)
- `skn` the policy name, verbatim

The token goes straight into the `Authorization` header of the request.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import time
from typing import Callable
from urllib.parse import quote_plus

# Returned instead of a token when uri, policy name or key is empty.
MISSING_PARAMETER = "Missing required parameter"

# One week.
TOKEN_TTL_SECONDS = 60 * 60 * 24 * 7


def query_escape(value: str) -> str:
    """Escape a value for use inside a URL query string.

    Only unreserved characters (letters, digits, `-_.~`) are kept, a space
    becomes `+`, everything else is percent-encoded.
    """
    return quote_plus(value, safe="")


class TokenSigner:
    """Build SAS tokens.

    Args:
        clock: Zero-argument callable returning the current Unix time in
            seconds. Tests pass a fixed value so tokens are reproducible.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock

    def sign(self, uri: str, policy_name: str, key: str) -> str:
        """Return a SAS token for `uri`, or `MISSING_PARAMETER`.

        Callers must check for the sentinel; no exception is raised.
        """
        if not uri or not policy_name or not key:
            return MISSING_PARAMETER

        encoded = query_escape(uri)
        expiry = str(int(self._clock()) + TOKEN_TTL_SECONDS)

        digest = hmac.new(
            key.encode("utf-8"),
            f"{encoded}\n{expiry}".encode("utf-8"),
            hashlib.sha256,
        ).digest()
        signature = query_escape(base64.b64encode(digest).decode("ascii"))

        return (
            f"SharedAccessSignature sr={encoded}&sig={signature}"
            f"&se={expiry}&skn={policy_name}"
        )


def create_shared_access_token(uri: str, policy_name: str, key: str) -> str:
    """Sign with the wall clock."""
    return TokenSigner().sign(uri, policy_name, key)
