"""Thin HTTP layer for the Spotify Web API.

Centralizes bearer headers, timeouts and error translation so the
higher-level helpers only deal with JSON payloads.
"""

from typing import Any, Dict, Optional

import requests

from app.config import HTTP_TIMEOUT, SPOTIFY_API_BASE
from app.core import UpstreamError


class SpotifyApiError(UpstreamError):
    """A Web API call failed or returned a non-success response."""

    def __init__(self, message: str, upstream_status: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = upstream_status


def spotify_headers(access_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


def _to_url(path_or_url: str) -> str:
    if path_or_url.startswith("http"):
        return path_or_url
    return f"{SPOTIFY_API_BASE}/{path_or_url.lstrip('/')}"


def _error_message(r: requests.Response) -> str:
    try:
        data = r.json()
    except ValueError:
        return r.text or r.reason or "Spotify error"
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict):
        return error.get("message") or str(error)
    return str(error or data)


def sp_request(
    method: str,
    access_token: str,
    path_or_url: str,
    *,
    params: Optional[Dict[str, Any]] = None,
    json: Any = None,
) -> Any:
    """
    Perform a Web API call and return the decoded JSON body.

    Raises SpotifyApiError on transport failures and non-2xx responses.
    Empty bodies decode to None.
    """
    url = _to_url(path_or_url)
    try:
        r = requests.request(
            method,
            url,
            headers=spotify_headers(access_token),
            params=params,
            json=json,
            timeout=HTTP_TIMEOUT,
        )
    except requests.RequestException as e:
        raise SpotifyApiError(f"{method} {url} failed: {e}") from e

    if not r.ok:
        raise SpotifyApiError(
            f"{method} {url} -> {r.status_code}: {_error_message(r)}",
            upstream_status=r.status_code,
        )

    if not r.content:
        return None
    try:
        return r.json()
    except ValueError as e:
        raise SpotifyApiError(f"{method} {url} returned invalid JSON") from e


def sp_get(access_token: str, path_or_url: str, *, params=None) -> Any:
    return sp_request("GET", access_token, path_or_url, params=params)


def sp_post(access_token: str, path_or_url: str, *, json=None) -> Any:
    return sp_request("POST", access_token, path_or_url, json=json)
