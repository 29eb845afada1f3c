import time
from urllib.parse import unquote_plus

import pytest

from captureorder.sas import (
    MISSING_PARAMETER,
    TOKEN_TTL_SECONDS,
    TokenSigner,
    create_shared_access_token,
    query_escape,
)

URI = "https://example.servicebus.windows.net/hub"
NOW = 1000000000


def _parts(token: str) -> dict:
    prefix = "SharedAccessSignature "
    assert token.startswith(prefix)
    return dict(pair.split("=", 1) for pair in token[len(prefix):].split("&"))


def test_pinned_token():
    token = TokenSigner(clock=lambda: NOW).sign(URI, "mypolicy", "secretkey")
    assert token == (
        "SharedAccessSignature "
        "sr=https%3A%2F%2Fexample.servicebus.windows.net%2Fhub"
        "&sig=QGZbmBVl3nrCswn8yF55FAXxSQQ4Txyf7W1YSqcgMIg%3D"
        "&se=1000604800"
        "&skn=mypolicy"
    )


def test_sign_is_deterministic_for_fixed_clock():
    signer = TokenSigner(clock=lambda: NOW)
    assert signer.sign(URI, "p", "k") == signer.sign(URI, "p", "k")


def test_expiry_is_one_week_after_now():
    parts = _parts(TokenSigner(clock=lambda: NOW + 0.9).sign(URI, "p", "k"))
    assert parts["se"] == str(NOW + TOKEN_TTL_SECONDS)
    assert TOKEN_TTL_SECONDS == 604800


@pytest.mark.parametrize(
    "uri,name,key",
    [("", "p", "k"), (URI, "", "k"), (URI, "p", ""), ("", "", "")],
)
def test_missing_parameter_returns_sentinel(uri, name, key):
    assert TokenSigner(clock=lambda: NOW).sign(uri, name, key) == MISSING_PARAMETER
    assert MISSING_PARAMETER == "Missing required parameter"


def test_changing_key_only_changes_signature():
    signer = TokenSigner(clock=lambda: NOW)
    a = _parts(signer.sign(URI, "mypolicy", "secretkey"))
    b = _parts(signer.sign(URI, "mypolicy", "secretkeY"))
    assert a["sig"] != b["sig"]
    assert (a["sr"], a["se"], a["skn"]) == (b["sr"], b["se"], b["skn"])


def test_resource_round_trips_through_url_decoding():
    uri = "sb://my ns.servicebus.windows.net/hub?x=1&y=ä~"
    parts = _parts(TokenSigner(clock=lambda: NOW).sign(uri, "p", "k"))
    assert unquote_plus(parts["sr"]) == uri


def test_policy_name_is_not_escaped():
    token = TokenSigner(clock=lambda: NOW).sign(URI, "Root Manage/Key", "k")
    assert token.endswith("&skn=Root Manage/Key")


def test_query_escape_matches_url_query_rules():
    assert query_escape("a b+c/d=e~f-g_h.i") == "a+b%2Bc%2Fd%3De~f-g_h.i"


def test_wall_clock_helper_expires_a_week_from_now():
    before = int(time.time())
    token = create_shared_access_token(URI, "mypolicy", "secretkey")
    after = int(time.time())
    se = int(_parts(token)["se"])
    assert before + TOKEN_TTL_SECONDS <= se <= after + TOKEN_TTL_SECONDS
    assert create_shared_access_token(URI, "mypolicy", "") == MISSING_PARAMETER
