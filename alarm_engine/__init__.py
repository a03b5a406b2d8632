from .alarm_config import AlarmSpec
from .alarm_manager import AlarmProvisioner, build_alarm_spec, build_alarm_specs

__all__ = [
    "AlarmSpec",
    "AlarmProvisioner",
    "build_alarm_spec",
    "build_alarm_specs",
]
