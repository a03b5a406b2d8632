from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple


class MetricUnit(str, Enum):
    BYTES = "Bytes"
    PERCENT = "Percent"
    COUNT = "Count"


Dimensions = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class MetricSample:
    """One CloudWatch data point, built fresh every collection cycle.

    Attributes:
        name (str): CloudWatch metric name, e.g. 'DiskSpaceUtilization'
        unit (MetricUnit): Unit reported to CloudWatch
        value (float): The sampled value
        dimensions (Dimensions): Ordered (name, value) pairs identifying the series
    """

    name: str
    unit: MetricUnit
    value: float
    dimensions: Dimensions = ()

    def series_key(self) -> Tuple[str, Dimensions]:
        return (self.name, self.dimensions)

    def to_metric_datum(self) -> Dict[str, Any]:
        """Render as a PutMetricData MetricDatum."""
        return {
            "MetricName": self.name,
            "Unit": self.unit.value,
            "Value": float(self.value),
            "Dimensions": [
                {"Name": name, "Value": value} for name, value in self.dimensions
            ],
        }
