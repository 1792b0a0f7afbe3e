from dotenv import load_dotenv
import os

from app.core.errors import ConfigError

load_dotenv()

# Spotify credentials (REQUIRED)
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET")
SPOTIFY_REDIRECT_URI = os.getenv("SPOTIFY_REDIRECT_URI")

# Front-end origins (REQUIRED)
CLIENT_URL = os.getenv("CLIENT_URL")
CLIENT_VERCEL_URL = os.getenv("CLIENT_VERCEL_URL")

# Runtime
APP_ENV = os.getenv("APP_ENV", "development")
PORT = int(os.getenv("PORT", "4000"))
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./soundhaven.db")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Spotify API constants
SPOTIFY_AUTH_URL = "https://accounts.spotify.com/authorize"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_API_BASE = "https://api.spotify.com/v1"

SCOPES = [
    "user-read-playback-state",
    "user-modify-playback-state",
    "playlist-modify-public",
    "playlist-modify-private",
    "streaming",
]

# Managed playlist
MANAGED_PLAYLIST_NAME = "SoundHaven"
MANAGED_PLAYLIST_DESCRIPTION = "Playlist generada automáticamente por SoundHaven"
PLAYLISTS_PAGE_SIZE = 50

# Cookies
STATE_COOKIE_NAME = "spotify_state"
STATE_COOKIE_MAX_AGE = 10 * 60
REFRESH_COOKIE_NAME = "refresh_token"
REFRESH_COOKIE_MAX_AGE = 30 * 24 * 60 * 60

# Cards
DAILY_CARDS_COUNT = 3

REQUIRED_SETTINGS = (
    "SPOTIFY_CLIENT_ID",
    "SPOTIFY_CLIENT_SECRET",
    "SPOTIFY_REDIRECT_URI",
    "CLIENT_URL",
    "CLIENT_VERCEL_URL",
)


def is_development() -> bool:
    return APP_ENV == "development"


def allowed_origins() -> list[str]:
    """
    Origins allowed to make credentialed cross-origin calls.
    """
    return [origin for origin in (CLIENT_VERCEL_URL, CLIENT_URL) if origin]


def validate_settings() -> None:
    """
    Fail fast when a required environment variable is missing.
    """
    missing = [name for name in REQUIRED_SETTINGS if not globals().get(name)]
    if missing:
        raise ConfigError(
            "Missing environment variables: " + ", ".join(missing)
        )
