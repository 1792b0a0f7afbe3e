from urllib.parse import urlencode

from fastapi import APIRouter, Query, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse

from app.config import CLIENT_URL
from app.core import Err, log_error, log_info, log_success, log_warning
from app.spotify import (
    build_spotify_auth_url,
    exchange_code,
    exchange_refresh_token,
    generate_state,
    states_match,
)

from .cookies import (
    clear_refresh_cookie,
    clear_state_cookie,
    read_refresh_cookie,
    read_state_cookie,
    set_refresh_cookie,
    set_state_cookie,
)
from .schemas import RefreshResponse

router = APIRouter()


def _login_redirect(error: str) -> RedirectResponse:
    return RedirectResponse(
        f"{CLIENT_URL}/login?{urlencode({'error': error})}", status_code=302
    )


@router.get("/login")
def login() -> RedirectResponse:
    """
    Start the authorization-code flow: issue a state nonce and redirect to Spotify.
    """
    state = generate_state()
    response = RedirectResponse(build_spotify_auth_url(state), status_code=302)
    set_state_cookie(response, state)
    return response


@router.get("/callback")
def auth_callback(
    request: Request,
    code: str | None = Query(default=None),
    state: str | None = Query(default=None),
    error: str | None = Query(default=None),
) -> Response:
    """
    Spotify redirect target.

    Example URLs:
      - /api/auth/callback?code=...&state=...
      - /api/auth/callback?error=access_denied&state=...
    """
    if error == "access_denied":
        log_info("User denied Spotify authorization.")
        return _login_redirect("access_denied")

    if not states_match(state, read_state_cookie(request)):
        log_warning("OAuth callback rejected: state mismatch.")
        return PlainTextResponse("State mismatch", status_code=400)

    if not code:
        response: Response = _login_redirect("invalid_code")
        clear_state_cookie(response)
        return response

    result = exchange_code(code)

    if isinstance(result, Err):
        if result.kind == "network":
            response = PlainTextResponse("Error retrieving tokens", status_code=500)
        else:
            log_warning(f"Authorization code rejected ({result.kind}).")
            response = _login_redirect("invalid_code")
        clear_state_cookie(response)
        return response

    tokens = result.value
    query = urlencode({"access_token": tokens.access_token})
    response = RedirectResponse(f"{CLIENT_URL}/cards?{query}", status_code=302)
    clear_state_cookie(response)
    if tokens.refresh_token:
        set_refresh_cookie(response, tokens.refresh_token)
    log_success("Spotify authorization complete.")
    return response


@router.get("/refresh", response_model=RefreshResponse)
def refresh(request: Request) -> Response:
    """
    Trade the refresh-token cookie for a new access token.

    Polled by the client app, so failures are plain status codes, never redirects.
    """
    refresh_token = read_refresh_cookie(request)
    if not refresh_token:
        return PlainTextResponse("Unauthorized", status_code=401)

    result = exchange_refresh_token(refresh_token)

    if isinstance(result, Err):
        if result.kind == "network":
            log_error(f"Token refresh failed: {result.detail}")
            return PlainTextResponse("Error refreshing token", status_code=500)
        body = result.body if result.body is not None else {"error": result.kind}
        return JSONResponse(body, status_code=400)

    tokens = result.value
    payload = RefreshResponse(
        access_token=tokens.access_token, expires_in=tokens.expires_in
    )
    response = JSONResponse(payload.model_dump())
    # Spotify does not always rotate the refresh token; keep the old cookie then.
    if tokens.refresh_token:
        set_refresh_cookie(response, tokens.refresh_token)
    return response


@router.post("/logout", status_code=204)
def logout() -> Response:
    response = Response(status_code=204)
    clear_refresh_cookie(response)
    return response
