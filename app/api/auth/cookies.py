"""Cookies carrying the OAuth state nonce and the long-lived refresh token.

- spotify_state : 10 minutes, http-only, same-site lax, single use
- refresh_token : 30 days, http-only, same-site lax, secure outside development
"""

from typing import Optional

from fastapi import Request, Response

from app.config import (
    REFRESH_COOKIE_MAX_AGE,
    REFRESH_COOKIE_NAME,
    STATE_COOKIE_MAX_AGE,
    STATE_COOKIE_NAME,
    is_development,
)


def set_state_cookie(response: Response, state: str) -> None:
    response.set_cookie(
        STATE_COOKIE_NAME,
        state,
        max_age=STATE_COOKIE_MAX_AGE,
        httponly=True,
        samesite="lax",
    )


def read_state_cookie(request: Request) -> Optional[str]:
    return request.cookies.get(STATE_COOKIE_NAME)


def clear_state_cookie(response: Response) -> None:
    response.delete_cookie(STATE_COOKIE_NAME, httponly=True, samesite="lax")


def set_refresh_cookie(response: Response, refresh_token: str) -> None:
    response.set_cookie(
        REFRESH_COOKIE_NAME,
        refresh_token,
        max_age=REFRESH_COOKIE_MAX_AGE,
        httponly=True,
        samesite="lax",
        secure=not is_development(),
    )


def read_refresh_cookie(request: Request) -> Optional[str]:
    return request.cookies.get(REFRESH_COOKIE_NAME)


def clear_refresh_cookie(response: Response) -> None:
    response.delete_cookie(
        REFRESH_COOKIE_NAME,
        httponly=True,
        samesite="lax",
        secure=not is_development(),
    )
