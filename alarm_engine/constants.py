"""Fixed alarm policy. None of these are configurable."""

from typing import Final

ALARM_EVALUATION_PERIODS: Final[int] = 1
ALARM_PERIOD_SECONDS: Final[int] = 60 * 5
ALARM_STATISTIC: Final[str] = "Average"
ALARM_COMPARISON_OPERATOR: Final[str] = "GreaterThanOrEqualToThreshold"

UTILIZATION_THRESHOLD: Final[float] = 85.0
STATUS_CHECK_THRESHOLD: Final[float] = 1.0

# Alarm name suffixes: {display_name}-{kind}[-{drive}]
DISK_SPACE_ALARM_KIND: Final[str] = "disk-space"
PHYSICAL_MEMORY_ALARM_KIND: Final[str] = "physical-memory"
CPU_UTILIZATION_ALARM_KIND: Final[str] = "CPU-utilization"
STATUS_CHECK_ALARM_KIND: Final[str] = "status-check"
