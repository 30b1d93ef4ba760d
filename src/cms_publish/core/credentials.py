"""Credentials for authenticated pushes to the content remote."""

from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

REDACTED = "***"


class CredentialProvider(ABC):
    """Produces the remote URL used for push given a base URL and a secret."""

    @abstractmethod
    def authenticated_url(self, base_url: str, token: Optional[str] = None) -> str:
        """Return the URL to configure on the remote."""


class TokenCredentialProvider(CredentialProvider):
    """Embeds an access token in HTTPS remote URLs.

    The token becomes the userinfo part of the URL
    (``https://<token>@github.com/org/repo.git``), which GitHub accepts
    for token authentication. SSH URLs and local paths are left untouched.
    """

    def authenticated_url(self, base_url: str, token: Optional[str] = None) -> str:
        parts = urlsplit(base_url)
        if parts.scheme not in ("http", "https"):
            return base_url

        host = _strip_userinfo(parts.netloc)
        netloc = f"{token}@{host}" if token else host
        return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))


def redact_url(url: str) -> str:
    """Hide any credentials embedded in a URL."""
    parts = urlsplit(url)
    if "@" not in parts.netloc or parts.scheme not in ("http", "https"):
        return url
    host = _strip_userinfo(parts.netloc)
    return urlunsplit(
        (parts.scheme, f"{REDACTED}@{host}", parts.path, parts.query, parts.fragment)
    )


def scrub(text: str, secret: Optional[str]) -> str:
    """Remove a secret from free text such as git error output."""
    if secret:
        text = text.replace(secret, REDACTED)
    return text


def _strip_userinfo(netloc: str) -> str:
    return netloc.rsplit("@", 1)[-1]
