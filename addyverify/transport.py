"""HTTP client for the Addy address validation endpoint."""

from typing import Any, Dict, Tuple

import requests

from .errors import ConfigurationError
from .logger import get_logger
from .models import TransportResult

logger = get_logger()

VALIDATION_PATH = "validation"


class AddyClient:
    """
    Thin wrapper around a single GET to Addy's validation API.

    Network failures are not raised; they come back as a TransportResult
    with status 0 so the caller reports them as a connection error.
    """

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        base_url: str = "https://api.addy.co.nz/",
        timeout: float = 15.0,
    ):
        if not api_key:
            raise ConfigurationError("ADDY_API_KEY not set. Set env var or pass --api-key.")
        if not api_secret:
            raise ConfigurationError("ADDY_API_SECRET not set. Set env var or pass --api-secret.")
        self.api_key = api_key
        self.api_secret = api_secret
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout

    def build_request(self, address: str) -> Tuple[str, Dict[str, Any], Dict[str, str]]:
        """Return (url, params, headers) for a validation query."""
        url = self.base_url + VALIDATION_PATH
        params = {
            "address": address,
            "key": self.api_key,
            "secret": self.api_secret,
        }
        headers = {"Accept": "application/json"}
        return url, params, headers

    def validate(self, address: str) -> TransportResult:
        url, params, headers = self.build_request(address)
        logger.record_api_call()
        logger.debug("Querying Addy", url=url, address=address)
        try:
            resp = requests.get(url, params=params, headers=headers, timeout=self.timeout)
        except requests.exceptions.Timeout:
            logger.record_error("Timeout")
            logger.warning("Addy request timed out", url=url)
            return TransportResult(0, "Addy request timed out. Try again later.")
        except requests.exceptions.RequestException as e:
            logger.record_error("RequestException")
            logger.error("Addy request error", url=url, error=str(e))
            return TransportResult(0, f"Addy request error: {e}")

        result = TransportResult(
            status_code=resp.status_code,
            status_description=resp.reason or "",
            body=resp.text,
        )
        if not result.ok:
            logger.record_error(f"HTTPError_{resp.status_code}")
            logger.warning("Addy returned an error status", status=resp.status_code, reason=resp.reason)
        return result
