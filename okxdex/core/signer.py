"""HMAC request signing for the OKX DEX API."""

from __future__ import annotations

import base64
import hashlib
import hmac
from datetime import datetime, timezone
from typing import Dict, Optional

from okxdex.config import ApiCredentials, ConfigurationError

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"})


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """Return an ISO-8601 UTC instant with millisecond precision, e.g. ``2024-01-01T00:00:00.000Z``."""
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class RequestSigner:
    """Produce the authenticated header set for a single API request.

    The credentials are checked once, when the signer is built, so a missing
    key surfaces at startup instead of on the first request.
    """

    def __init__(self, credentials: ApiCredentials) -> None:
        missing = credentials.missing_fields()
        if missing:
            raise ConfigurationError(f"api credentials missing required fields: {', '.join(missing)}")
        self._credentials = credentials

    def signature(self, timestamp: str, method: str, path: str, query: str = "") -> str:
        """Return ``base64(HMAC-SHA256(secret, timestamp + method + path + query))``."""
        verb = method.upper()
        if verb not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")
        message = f"{timestamp}{verb}{path}{query}"
        mac = hmac.new(
            self._credentials.secret_key.encode("utf-8"),
            message.encode("utf-8"),
            digestmod=hashlib.sha256,
        )
        return base64.b64encode(mac.digest()).decode("ascii")

    def sign(self, timestamp: str, method: str, path: str, query: str = "") -> Dict[str, str]:
        """Return the headers for a request.

        ``path`` and ``query`` must be the exact strings sent on the wire;
        ``query`` includes its leading ``?`` when present.
        """
        return {
            "Content-Type": "application/json",
            "OK-ACCESS-KEY": self._credentials.api_key,
            "OK-ACCESS-SIGN": self.signature(timestamp, method, path, query),
            "OK-ACCESS-TIMESTAMP": timestamp,
            "OK-ACCESS-PASSPHRASE": self._credentials.passphrase,
            "OK-ACCESS-PROJECT": self._credentials.project_id,
        }


__all__ = ["HTTP_METHODS", "RequestSigner", "iso_timestamp"]
