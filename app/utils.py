# app/utils.py
import re
from urllib.parse import urlparse

from app.errors import InvalidURLError
from app.logger_config import logger

DOMAIN_PATTERN = re.compile(
    r'^([a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z0-9][a-zA-Z0-9\-]{0,61}[a-zA-Z0-9]$'
)


def normalize_url(url: str) -> str:
    """
    Validates a user supplied URL and returns it in normalized form.
    - Adds 'https://' when the scheme is missing
    - Only http and https are accepted
    - Keeps path and query, drops the fragment
    - Does not perform a DNS lookup
    """
    url = (url or "").strip()
    if not url:
        raise InvalidURLError("Invalid URL", detail="URL is empty")

    if not re.match(r"^[a-zA-Z][a-zA-Z0-9+.\-]*://", url):
        url = f"https://{url}"
        logger.debug(f"URL missing protocol, prepended 'https://'. Updated URL: {url}")

    try:
        parsed_url = urlparse(url)
        hostname = parsed_url.hostname
        parsed_url.port  # raises ValueError on a malformed port
    except ValueError as e:
        raise InvalidURLError("Invalid URL", detail=str(e)) from e

    if parsed_url.scheme.lower() not in ("http", "https"):
        raise InvalidURLError("Invalid URL", detail=f"unsupported scheme '{parsed_url.scheme}'")

    if not hostname or not DOMAIN_PATTERN.match(hostname):
        raise InvalidURLError("Invalid URL", detail=f"invalid domain '{parsed_url.netloc}'")

    return parsed_url._replace(
        scheme=parsed_url.scheme.lower(), path=parsed_url.path or "/", fragment=""
    ).geturl()
