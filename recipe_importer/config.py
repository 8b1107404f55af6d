"""Configuration helpers for environment-dependent services."""
from __future__ import annotations

import os
from functools import lru_cache

import requests

from .logging_config import get_logger

logger = get_logger(__name__)

REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "15"))

USER_AGENT = os.getenv(
    "USER_AGENT",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)

# "chain" tries direct fetch, the relays and the callback relay in order;
# "direct" only fetches the page itself and treats any failure as fatal.
ACQUISITION_MODE = os.getenv("ACQUISITION_MODE", "chain").strip().lower()

_DEFAULT_RELAY_TEMPLATES = (
    "https://api.allorigins.win/raw?url={url}",
    "https://corsproxy.io/?{url}",
    "https://api.codetabs.com/v1/proxy?quest={url}",
)

RELAY_TEMPLATES = tuple(
    template.strip()
    for template in os.getenv("RELAY_TEMPLATES", ",".join(_DEFAULT_RELAY_TEMPLATES)).split(",")
    if template.strip()
)

JSONP_RELAY_TEMPLATE = os.getenv(
    "JSONP_RELAY_TEMPLATE",
    "https://api.allorigins.win/get?url={url}&callback={callback}",
)

CALLBACK_TIMEOUT_SECONDS = float(os.getenv("CALLBACK_TIMEOUT_SECONDS", "10"))

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

SETTINGS = {
    "request_timeout": REQUEST_TIMEOUT_SECONDS,
    "user_agent": USER_AGENT,
    "acquisition_mode": ACQUISITION_MODE,
    "relay_templates": RELAY_TEMPLATES,
    "jsonp_relay_template": JSONP_RELAY_TEMPLATE,
    "callback_timeout": CALLBACK_TIMEOUT_SECONDS,
    "host": HOST,
    "port": PORT,
}


def get_setting(name: str):
    """Return a configured value by name."""
    try:
        return SETTINGS[name]
    except KeyError as exc:
        message = f"Setting '{name}' is not configured."
        logger.error(message)
        raise RuntimeError(message) from exc


def build_http_session() -> requests.Session:
    """Create a session carrying the browser-like headers used for page fetches."""
    session = requests.Session()
    session.headers.update(
        {
            "User-Agent": USER_AGENT,
            "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }
    )
    return session


@lru_cache(maxsize=1)
def get_http_session() -> requests.Session:
    """Instantiate (and cache) the shared HTTP session for direct and relay fetches."""
    logger.debug("Creating HTTP session with user agent %s", USER_AGENT)
    return build_http_session()


__all__ = [
    "ACQUISITION_MODE",
    "CALLBACK_TIMEOUT_SECONDS",
    "HOST",
    "JSONP_RELAY_TEMPLATE",
    "PORT",
    "RELAY_TEMPLATES",
    "REQUEST_TIMEOUT_SECONDS",
    "USER_AGENT",
    "build_http_session",
    "get_http_session",
    "get_setting",
]
