import logging
from typing import List

import psutil

from .base_plugin import BaseResourcePlugin
from .resource import Drive

logger = logging.getLogger(__name__)


class DISKPlugin(BaseResourcePlugin):
    """Enumerates mounted volumes with their capacity."""

    def __init__(self, all_partitions: bool = False):
        self.all_partitions = all_partitions

    def filter_drive_info(self, partition) -> Drive:
        """Read usage for a partition; unreadable volumes are reported not ready."""
        try:
            usage = psutil.disk_usage(partition.mountpoint)
        except OSError as e:
            logger.debug(f"Drive {partition.mountpoint} not ready: {e}")
            return Drive(name=partition.mountpoint, is_ready=False)

        return Drive(
            name=partition.mountpoint,
            is_ready=True,
            total_bytes=usage.total,
            available_bytes=usage.free,
        )

    def discover(self) -> List[Drive]:
        return [
            self.filter_drive_info(partition)
            for partition in psutil.disk_partitions(all=self.all_partitions)
        ]
