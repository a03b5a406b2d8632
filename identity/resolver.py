import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Protocol

from exceptions import IdentityResolutionError

logger = logging.getLogger(__name__)

NAME_TAG_KEY = "Name"


class MetadataSource(Protocol):
    def get_instance_id(self) -> str: ...

    def get_availability_zone(self) -> str: ...


class DescribeSource(Protocol):
    def get_instance_tags(self, instance_id: str, region: str) -> Dict[str, str]: ...


@dataclass(frozen=True)
class Identity:
    """Snapshot of what is known about the running instance.

    A field left as None has not been resolved yet.
    """

    instance_id: Optional[str] = None
    region: Optional[str] = None
    display_name: Optional[str] = None


def region_from_availability_zone(availability_zone: str) -> str:
    """Strip the zone letter: "us-east-1a" -> "us-east-1"."""
    availability_zone = availability_zone.strip()
    if len(availability_zone) < 2:
        raise IdentityResolutionError(
            f"Cannot derive region from availability zone '{availability_zone}'"
        )
    return availability_zone[:-1]


class IdentityResolver:
    """Lazily resolves and memoizes instance id, region and display name.

    Each field is fetched at most once per process. A failed lookup is not
    cached, so the next call tries again.
    """

    def __init__(
        self,
        metadata_client: MetadataSource,
        describe_client: DescribeSource,
        instance_id: Optional[str] = None,
        region: Optional[str] = None,
    ) -> None:
        self.metadata_client = metadata_client
        self.describe_client = describe_client
        self._instance_id = instance_id or None
        self._region = region or None
        self._display_name: Optional[str] = None
        self._lock = threading.Lock()

    def identity(self) -> Identity:
        return Identity(
            instance_id=self._instance_id,
            region=self._region,
            display_name=self._display_name,
        )

    def resolve_instance_id(self) -> str:
        return self._resolve(
            "_instance_id", "Instance ID", self.metadata_client.get_instance_id
        )

    def resolve_region(self) -> str:
        return self._resolve("_region", "Region", self._fetch_region)

    def resolve_display_name(self) -> str:
        if self._display_name:
            return self._display_name

        # DescribeInstances is addressed by region, so both must resolve first.
        # Their failures are logged by their own resolve calls.
        instance_id = self.resolve_instance_id()
        region = self.resolve_region()
        return self._resolve(
            "_display_name",
            "Instance name",
            lambda: self._fetch_display_name(instance_id, region),
        )

    def _resolve(self, field_name: str, label: str, fetch: Callable[[], str]) -> str:
        cached = getattr(self, field_name)
        if cached:
            return cached

        with self._lock:
            cached = getattr(self, field_name)
            if cached:
                return cached
            try:
                value = fetch()
            except IdentityResolutionError as e:
                logger.error(f"Error getting {label}: {e}")
                raise
            setattr(self, field_name, value)
            logger.info(f"{label}: {value}")
            return value

    def _fetch_region(self) -> str:
        availability_zone = self.metadata_client.get_availability_zone()
        logger.info(f"Availability Zone: {availability_zone}")
        return region_from_availability_zone(availability_zone)

    def _fetch_display_name(self, instance_id: str, region: str) -> str:
        tags = self.describe_client.get_instance_tags(instance_id, region)
        name = tags.get(NAME_TAG_KEY)
        if not name:
            logger.warning(
                f"Instance {instance_id} has no {NAME_TAG_KEY} tag, using its id"
            )
            return instance_id
        return name
