import boto3
import logging
from botocore.config import Config
from typing import Any, Dict, Optional, Tuple

from constants import (
    AWS_CONNECT_TIMEOUT_SECONDS,
    AWS_MAX_ATTEMPTS,
    AWS_READ_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)

CLIENT_CONFIG = Config(
    connect_timeout=AWS_CONNECT_TIMEOUT_SECONDS,
    read_timeout=AWS_READ_TIMEOUT_SECONDS,
    retries={"max_attempts": AWS_MAX_ATTEMPTS, "mode": "standard"},
)


def create_session(
    region: str,
    aws_access_key: Optional[str] = None,
    aws_secret_key: Optional[str] = None,
) -> boto3.Session:
    """Create a boto3 Session for the region.

    Static keys from the settings file win; otherwise boto3 falls back to its
    default credential chain (environment, profile, instance role).
    """
    if aws_access_key and aws_secret_key:
        return boto3.Session(
            aws_access_key_id=aws_access_key,
            aws_secret_access_key=aws_secret_key,
            region_name=region,
        )
    return boto3.Session(region_name=region)


class SessionManager:
    """Caches one boto3 Session per region and one client per service."""

    def __init__(
        self,
        aws_access_key: Optional[str] = None,
        aws_secret_key: Optional[str] = None,
    ) -> None:
        self._aws_access_key = aws_access_key
        self._aws_secret_key = aws_secret_key
        self._sessions: Dict[str, boto3.Session] = {}
        self._clients: Dict[Tuple[str, str], Any] = {}

    def get_session(self, region: str) -> boto3.Session:
        """Get or create a boto3 Session for the region."""
        if region not in self._sessions:
            self._sessions[region] = create_session(
                region, self._aws_access_key, self._aws_secret_key
            )
            logger.debug(f"Session created for region {region}")
        return self._sessions[region]

    def get_client(self, service_name: str, region: str) -> Any:
        """Get or create a client with bounded timeouts."""
        client_key = (service_name, region)
        if client_key not in self._clients:
            self._clients[client_key] = self.get_session(region).client(
                service_name, config=CLIENT_CONFIG
            )
        return self._clients[client_key]
