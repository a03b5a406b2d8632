from .batch_submitter import BatchSubmitter
from .collector import MetricCollector, disk_utilization, drive_identifier
from .metric_sample import MetricSample, MetricUnit

__all__ = [
    "BatchSubmitter",
    "MetricCollector",
    "MetricSample",
    "MetricUnit",
    "disk_utilization",
    "drive_identifier",
]
