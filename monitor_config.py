import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from constants import DEFAULT_MONITOR_PERIOD_MINUTES
from exceptions import ConfigurationError
from utils import load_yaml, read_bool, read_int, read_string, read_string_list

logger = logging.getLogger(__name__)

DISK_FLAGS = (
    "submit_disk_space_available",
    "submit_disk_space_used",
    "submit_disk_space_utilization",
)

MEMORY_FLAGS = (
    "submit_memory_available",
    "submit_memory_used",
    "submit_memory_utilization",
    "submit_physical_memory_available",
    "submit_physical_memory_used",
    "submit_physical_memory_utilization",
    "submit_virtual_memory_available",
    "submit_virtual_memory_used",
    "submit_virtual_memory_utilization",
)


@dataclass(frozen=True)
class MonitorConfig:
    """Settings read once from monitor_settings.yml."""

    monitor_period_in_minutes: int = DEFAULT_MONITOR_PERIOD_MINUTES

    # Disk metrics
    submit_disk_space_available: bool = True
    submit_disk_space_used: bool = True
    submit_disk_space_utilization: bool = True

    # Memory metrics
    submit_memory_available: bool = True
    submit_memory_used: bool = True
    submit_memory_utilization: bool = True
    submit_physical_memory_available: bool = True
    submit_physical_memory_used: bool = True
    submit_physical_memory_utilization: bool = True
    submit_virtual_memory_available: bool = True
    submit_virtual_memory_used: bool = True
    submit_virtual_memory_utilization: bool = True

    # None means every drive is included
    include_drives: Optional[Tuple[str, ...]] = None

    instance_id: Optional[str] = None
    region: Optional[str] = None

    aws_access_key: Optional[str] = field(default=None, repr=False)
    aws_secret_key: Optional[str] = field(default=None, repr=False)

    alarm_sns_topics: Tuple[str, ...] = ()
    create_cpu_utilization_alarm: bool = True
    create_status_check_alarm: bool = True

    @property
    def period_seconds(self) -> float:
        return self.monitor_period_in_minutes * 60.0

    @property
    def any_disk_metric(self) -> bool:
        return any(getattr(self, flag) for flag in DISK_FLAGS)

    @property
    def any_memory_metric(self) -> bool:
        return any(getattr(self, flag) for flag in MEMORY_FLAGS)

    @property
    def any_metric(self) -> bool:
        return self.any_disk_metric or self.any_memory_metric

    def is_drive_included(self, identifier: str) -> bool:
        return self.include_drives is None or identifier in self.include_drives

    def validate(self) -> "MonitorConfig":
        if self.monitor_period_in_minutes < 1:
            raise ConfigurationError(
                "monitor_period_in_minutes must be greater than or equal to 1"
            )
        if not self.any_metric:
            raise ConfigurationError("No data is selected to submit.")
        return self

    @classmethod
    def from_dict(cls, settings: Dict[str, Any]) -> "MonitorConfig":
        """Build a validated MonitorConfig from raw YAML settings."""
        if not isinstance(settings, dict):
            raise ConfigurationError("Monitor settings must be a mapping")

        flags = {
            flag: read_bool(settings, flag, True) for flag in DISK_FLAGS + MEMORY_FLAGS
        }
        include_drives = read_string_list(settings, "include_drives")

        return cls(
            monitor_period_in_minutes=read_int(
                settings, "monitor_period_in_minutes", DEFAULT_MONITOR_PERIOD_MINUTES
            ),
            include_drives=tuple(include_drives) if include_drives is not None else None,
            instance_id=read_string(settings, "instance_id"),
            region=read_string(settings, "region"),
            aws_access_key=read_string(settings, "aws_access_key"),
            aws_secret_key=read_string(settings, "aws_secret_key"),
            alarm_sns_topics=tuple(read_string_list(settings, "alarm_sns_topics", [])),
            create_cpu_utilization_alarm=read_bool(
                settings, "create_cpu_utilization_alarm", True
            ),
            create_status_check_alarm=read_bool(
                settings, "create_status_check_alarm", True
            ),
            **flags,
        ).validate()


def load_monitor_config(path: Union[str, Path]) -> MonitorConfig:
    """Read and validate the monitor settings file."""
    logger.info(f"Reading configuration from {path}")
    try:
        data = load_yaml(path)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Error loading monitor settings from {path}: {e}")
        raise ConfigurationError(f"Unable to read {path}: {e}") from e

    config = MonitorConfig.from_dict(data)
    log_monitor_config(config)
    return config


def log_monitor_config(config: MonitorConfig) -> None:
    logger.info(f"MonitorPeriodInMinutes: {config.monitor_period_in_minutes}")
    for flag in DISK_FLAGS + MEMORY_FLAGS:
        logger.info(f"{flag}: {getattr(config, flag)}")
    if config.include_drives is not None:
        logger.info(f"IncludeDrives: {','.join(config.include_drives)}")
    else:
        logger.info("IncludeDrives: All drives")
    if config.instance_id:
        logger.info(f"Instance ID: {config.instance_id}")
    if config.region:
        logger.info(f"Region: {config.region}")
