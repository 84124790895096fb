"""Client for the external CLA signing registry."""

import json
import logging

import httpx

from clabot.errors import OracleDecodeError, OracleProtocolError, OracleTransportError

logger = logging.getLogger(__name__)


class SigningOracleClient:
    """Answers whether an email address has a CLA on file.

    The registry is queried with ``GET <check_url>?email=<email>`` and must
    answer ``{"data": {"signed": <bool>}}``.
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        check_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ):
        """
        Args:
            check_url: Base URL of the signing-check endpoint
            timeout: Request timeout in seconds
            client: Optional preconfigured ``httpx.Client`` (used by tests)
        """
        self.check_url = check_url
        self.timeout = timeout
        self._client = client

    def is_signed(self, email: str) -> bool:
        """
        Look up the signing status of ``email``.

        Raises:
            OracleTransportError: If the registry cannot be reached
            OracleProtocolError: If the status is outside 200-299
            OracleDecodeError: If the body has the wrong shape
        """
        try:
            if self._client is not None:
                response = self._client.get(self.check_url, params={"email": email})
            else:
                response = httpx.get(self.check_url, params={"email": email}, timeout=self.timeout)
        except httpx.HTTPError as e:
            raise OracleTransportError(f"failed to query {self.check_url}: {e}") from e

        body = response.text
        if not 200 <= response.status_code <= 299:
            raise OracleProtocolError(response.status_code, body)

        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise OracleDecodeError(f"unmarshal failed: {e}") from e

        signed = None
        if isinstance(data, dict) and isinstance(data.get("data"), dict):
            signed = data["data"].get("signed")
        if not isinstance(signed, bool):
            raise OracleDecodeError(f"unmarshal failed: unexpected body {body!r}")

        logger.debug(f"Signing status of {email}: {signed}")
        return signed
