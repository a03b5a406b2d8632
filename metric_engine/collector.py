import logging
from typing import List, Protocol, Set

from exceptions import IdentityResolutionError
from identity import Identity
from monitor_config import MonitorConfig
from resource_discovery import Drive, MemoryCounters
from .metric_sample import Dimensions, MetricSample, MetricUnit

logger = logging.getLogger(__name__)


class ResourceEnumerator(Protocol):
    def list_drives(self) -> List[Drive]: ...

    def read_memory(self) -> MemoryCounters: ...


def drive_identifier(drive_name: str) -> str:
    """Derive the Drive dimension value from a drive name.

    Drive-letter roots collapse to their letter ("C:\\" -> "C"). POSIX mount
    points all start with "/", so they keep the whole mount point.
    """
    if drive_name.startswith("/"):
        return drive_name.rstrip("/") or "/"
    return drive_name[:1]


def disk_utilization(total_bytes: int, used_bytes: int) -> float:
    # A drive reporting no size is treated as full
    if total_bytes == 0:
        return 100.0
    return (float(used_bytes) / float(total_bytes)) * 100.0


class MetricCollector:
    """Builds the list of samples for one collection cycle."""

    def __init__(self, enumerator: ResourceEnumerator) -> None:
        self.enumerator = enumerator

    def collect(self, config: MonitorConfig, identity: Identity) -> List[MetricSample]:
        if not identity.instance_id:
            raise IdentityResolutionError("Instance ID is not resolved")

        samples: List[MetricSample] = []

        if config.any_disk_metric:
            seen: Set[str] = set()
            for drive in self.enumerator.list_drives():
                samples.extend(
                    self._drive_samples(config, identity.instance_id, drive, seen)
                )

        if config.any_memory_metric:
            samples.extend(
                self._memory_samples(
                    config, identity.instance_id, self.enumerator.read_memory()
                )
            )

        return samples

    def _drive_samples(
        self, config: MonitorConfig, instance_id: str, drive: Drive, seen: Set[str]
    ) -> List[MetricSample]:
        identifier = drive_identifier(drive.name)

        if not config.is_drive_included(identifier):
            logger.info(f"Not including drive: {identifier}")
            return []

        logger.info(f"Adding metrics for drive: {identifier}")

        if not drive.is_ready:
            logger.info(f"Drive {identifier} not ready")
            return []

        if identifier in seen:
            logger.warning(f"Drive {identifier} already reported this cycle, skipping")
            return []
        seen.add(identifier)

        dimensions: Dimensions = (("InstanceId", instance_id), ("Drive", identifier))
        used = drive.total_bytes - drive.available_bytes
        utilization = disk_utilization(drive.total_bytes, used)

        logger.info(f"Total Disk Space: {drive.total_bytes:,} bytes")

        samples = []
        if config.submit_disk_space_used:
            logger.info(f"Disk Space Used: {used:,} bytes")
            samples.append(
                MetricSample("DiskSpaceUsed", MetricUnit.BYTES, float(used), dimensions)
            )
        if config.submit_disk_space_available:
            logger.info(f"Disk Space Available: {drive.available_bytes:,} bytes")
            samples.append(
                MetricSample(
                    "DiskSpaceAvailable",
                    MetricUnit.BYTES,
                    float(drive.available_bytes),
                    dimensions,
                )
            )
        if config.submit_disk_space_utilization:
            logger.info(f"Disk Space Utilization: {utilization:.1f}%")
            samples.append(
                MetricSample(
                    "DiskSpaceUtilization", MetricUnit.PERCENT, utilization, dimensions
                )
            )
        return samples

    def _memory_samples(
        self, config: MonitorConfig, instance_id: str, memory: MemoryCounters
    ) -> List[MetricSample]:
        logger.info("Adding memory metrics")
        dimensions: Dimensions = (("InstanceId", instance_id),)

        categories = [
            (
                "PhysicalMemory",
                memory.available_physical,
                memory.total_physical,
                config.submit_physical_memory_used,
                config.submit_physical_memory_available,
                config.submit_physical_memory_utilization,
            ),
            (
                "VirtualMemory",
                memory.available_virtual,
                memory.total_virtual,
                config.submit_virtual_memory_used,
                config.submit_virtual_memory_available,
                config.submit_virtual_memory_utilization,
            ),
            (
                "Memory",
                memory.available_physical + memory.available_virtual,
                memory.total_physical + memory.total_virtual,
                config.submit_memory_used,
                config.submit_memory_available,
                config.submit_memory_utilization,
            ),
        ]

        samples = []
        for prefix, available, total, want_used, want_available, want_util in categories:
            used = total - available
            utilization = (used / total) * 100

            logger.info(f"Total {prefix}: {total:,.0f} bytes")
            if want_used:
                samples.append(
                    MetricSample(f"{prefix}Used", MetricUnit.BYTES, used, dimensions)
                )
            if want_available:
                samples.append(
                    MetricSample(
                        f"{prefix}Available", MetricUnit.BYTES, available, dimensions
                    )
                )
            if want_util:
                logger.info(f"{prefix} Utilization: {utilization:.1f}%")
                samples.append(
                    MetricSample(
                        f"{prefix}Utilization",
                        MetricUnit.PERCENT,
                        utilization,
                        dimensions,
                    )
                )
        return samples
