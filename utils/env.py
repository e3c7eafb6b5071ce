"""
Module: env.py
Description:
    Loads `.env` and exposes the settings shared by the tracker clients.

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    Reads configuration from `.env`.
    - Required/used env vars:
        * MAL_API_URL
        * ANILIST_API_URL
        * ANNICT_API_URL
        * REQUEST_TIMEOUT
        * PAGE_DELAY
        * MAL_ACCESS_TOKEN / ANILIST_ACCESS_TOKEN / ANNICT_ACCESS_TOKEN
"""

import os
import sys
from pathlib import Path
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

console = Console()

# === Load .env ===
base_path = Path(__file__).resolve().parent
env_path = base_path.parent / ".env"
load_dotenv(dotenv_path=env_path)

MAL_API_URL = os.getenv("MAL_API_URL", "https://api.myanimelist.net/v2")
ANILIST_API_URL = os.getenv("ANILIST_API_URL", "https://graphql.anilist.co")
ANNICT_API_URL = os.getenv("ANNICT_API_URL", "https://api.annict.com/graphql")


def get_float_env(name, default):
    """Read a numeric env var; a malformed value is reported and replaced by `default`."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return float(default)
    try:
        return float(raw)
    except ValueError:
        console.print(
            f"[yellow]⚠️  Invalid value for {name}: '{escape(raw)}' (expected a number); using {default}[/yellow]"
        )
        return float(default)


REQUEST_TIMEOUT = get_float_env("REQUEST_TIMEOUT", 10)
PAGE_DELAY = get_float_env("PAGE_DELAY", 2)  # Seconds between paginated list requests


def token_env_var(provider) -> str:
    """Name of the env var holding the access token for `provider`."""
    return f"{provider.name}_ACCESS_TOKEN"


def get_access_token(provider):
    """Read the provider's access token at call time so tests and the CLI can swap it."""
    token = os.getenv(token_env_var(provider))
    return token.strip() if token else None


def validate_env_vars(required_vars):
    """Ensure all required environment variables are set."""
    missing = [var for var in required_vars if not os.getenv(var)]
    if missing:
        console.print(
            f"[bold red]❌ Missing required environment variables: {', '.join(missing)}[/bold red]"
        )
        sys.exit(1)
