from dataclasses import dataclass
from typing import Any, Dict, Tuple

from metric_engine.metric_sample import Dimensions, MetricUnit


@dataclass(frozen=True)
class AlarmSpec:
    """Configuration for a CloudWatch alarm.

    Attributes:
        name (str): Alarm name; re-deploying the same name overwrites the alarm
        metric_name (str): The metric the alarm watches
        namespace (str): The metric's CloudWatch namespace
        dimensions (Dimensions): Ordered (name, value) pairs of the watched series
        statistic (str): The statistic to apply to the metric (e.g., 'Average')
        comparison_operator (str): How the statistic is compared to the threshold
        threshold (float): The threshold value to compare against
        unit (MetricUnit): The unit of measurement for the metric
        period (int): The period in seconds over which the metric is evaluated
        evaluation_periods (int): Periods to evaluate before triggering the alarm
        notification_targets (Tuple[str, ...]): SNS topic ARNs notified on alarm
        actions_enabled (bool): Whether the alarm actions fire
        description (str): Optional description of the alarm
    """

    name: str
    metric_name: str
    namespace: str
    dimensions: Dimensions
    statistic: str
    comparison_operator: str
    threshold: float
    unit: MetricUnit
    period: int
    evaluation_periods: int
    notification_targets: Tuple[str, ...] = ()
    actions_enabled: bool = True
    description: str = ""

    def __bool__(self) -> bool:
        """True if the alarm has a name, False otherwise"""
        return bool(self.name)

    def to_put_metric_alarm_kwargs(self) -> Dict[str, Any]:
        """Render as keyword arguments for CloudWatch put_metric_alarm."""
        return {
            "AlarmName": self.name,
            "AlarmDescription": self.description,
            "ActionsEnabled": self.actions_enabled,
            "AlarmActions": list(self.notification_targets),
            "MetricName": self.metric_name,
            "Namespace": self.namespace,
            "Dimensions": [
                {"Name": name, "Value": value} for name, value in self.dimensions
            ],
            "Statistic": self.statistic,
            "Period": self.period,
            "EvaluationPeriods": self.evaluation_periods,
            "Threshold": float(self.threshold),
            "ComparisonOperator": self.comparison_operator,
            "Unit": self.unit.value,
        }
