import logging
from typing import Dict, Optional

import requests

from constants import (
    METADATA_BASE_URL,
    METADATA_TIMEOUT_SECONDS,
    METADATA_TOKEN_TTL_SECONDS,
)
from exceptions import IdentityResolutionError

logger = logging.getLogger(__name__)


class InstanceMetadataClient:
    """Reads instance identity from the EC2 instance metadata service.

    Prefers an IMDSv2 session token and falls back to plain IMDSv1 requests
    when the token endpoint is unavailable.
    """

    def __init__(
        self,
        base_url: str = METADATA_BASE_URL,
        timeout: float = METADATA_TIMEOUT_SECONDS,
        http: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = http or requests.Session()

    def _get_token(self) -> Optional[str]:
        try:
            response = self.http.put(
                f"{self.base_url}/api/token",
                headers={
                    "X-aws-ec2-metadata-token-ttl-seconds": str(
                        METADATA_TOKEN_TTL_SECONDS
                    )
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.text
        except requests.RequestException as e:
            logger.debug(f"IMDSv2 token unavailable, using IMDSv1: {e}")
            return None

    def _get(self, path: str) -> str:
        headers: Dict[str, str] = {}
        token = self._get_token()
        if token:
            headers["X-aws-ec2-metadata-token"] = token

        try:
            response = self.http.get(
                f"{self.base_url}/meta-data/{path}",
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise IdentityResolutionError(f"Metadata lookup '{path}' failed: {e}") from e

        value = response.text.strip()
        if not value:
            raise IdentityResolutionError(f"Metadata lookup '{path}' returned nothing")
        return value

    def get_instance_id(self) -> str:
        return self._get("instance-id")

    def get_availability_zone(self) -> str:
        return self._get("placement/availability-zone")
