"""OAuth authorization-code flow against the Spotify accounts service.

- builds the authorize URL and its anti-CSRF state nonce
- exchanges authorization codes and refresh tokens at the token endpoint

Token endpoint calls never raise: they return Ok(TokenSet) or Err(...) and
the caller decides how to surface the failure.
"""

import secrets
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import requests

from app.config import (
    HTTP_TIMEOUT,
    SCOPES,
    SPOTIFY_AUTH_URL,
    SPOTIFY_CLIENT_ID,
    SPOTIFY_CLIENT_SECRET,
    SPOTIFY_REDIRECT_URI,
    SPOTIFY_TOKEN_URL,
)
from app.core import Err, Ok, Result, log_warning

STATE_NUM_BYTES = 16


@dataclass(frozen=True)
class TokenSet:
    access_token: str
    expires_in: Optional[int] = None
    refresh_token: Optional[str] = None
    token_type: Optional[str] = None
    scope: Optional[str] = None


def generate_state() -> str:
    """
    Random hex nonce for the authorize redirect (128 bits of entropy).
    """
    return secrets.token_hex(STATE_NUM_BYTES)


def states_match(received: Optional[str], expected: Optional[str]) -> bool:
    """
    Exact comparison of the echoed state against the stored nonce.

    Missing values on either side never match.
    """
    if not received or not expected:
        return False
    return secrets.compare_digest(
        received.encode("utf-8"), expected.encode("utf-8")
    )


def build_spotify_auth_url(state: str) -> str:
    params = {
        "client_id": SPOTIFY_CLIENT_ID,
        "response_type": "code",
        "redirect_uri": SPOTIFY_REDIRECT_URI,
        "scope": " ".join(SCOPES),
        "state": state,
        "show_dialog": "true",
    }
    return f"{SPOTIFY_AUTH_URL}?{urlencode(params)}"


def _post_token_form(form: Dict[str, Any]) -> Result[TokenSet]:
    form = {
        **form,
        "client_id": SPOTIFY_CLIENT_ID,
        "client_secret": SPOTIFY_CLIENT_SECRET,
    }
    try:
        # `data=` sends application/x-www-form-urlencoded as the endpoint requires
        r = requests.post(
            SPOTIFY_TOKEN_URL,
            data=form,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            timeout=HTTP_TIMEOUT,
        )
    except requests.RequestException as e:
        log_warning(f"Token endpoint unreachable: {e}")
        return Err(kind="network", detail=str(e))

    try:
        data = r.json()
    except ValueError:
        return Err(
            kind="malformed_response",
            detail=r.text,
            status_code=r.status_code,
            body={"error": r.text or "invalid_response"},
        )

    if not r.ok or not isinstance(data, dict) or not data.get("access_token"):
        kind = data.get("error") if isinstance(data, dict) else None
        detail = data.get("error_description", "") if isinstance(data, dict) else ""
        return Err(
            kind=kind or "invalid_response",
            detail=detail,
            status_code=r.status_code,
            body=data,
        )

    expires_in = data.get("expires_in")
    return Ok(
        TokenSet(
            access_token=data["access_token"],
            expires_in=int(expires_in) if expires_in is not None else None,
            refresh_token=data.get("refresh_token"),
            token_type=data.get("token_type"),
            scope=data.get("scope"),
        )
    )


def exchange_code(code: str, redirect_uri: Optional[str] = None) -> Result[TokenSet]:
    """
    Exchange an authorization code for access + refresh tokens.

    An expired, reused or mismatched code comes back as Err(kind="invalid_grant").
    """
    return _post_token_form(
        {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_uri or SPOTIFY_REDIRECT_URI,
        }
    )


def exchange_refresh_token(refresh_token: str) -> Result[TokenSet]:
    """
    Exchange a refresh token for a new access token.

    Spotify may or may not rotate the refresh token: `refresh_token` on the
    returned TokenSet is None when the old one stays valid.
    """
    return _post_token_form(
        {
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
        }
    )
