from typing import Final

### Common constants ###
# File paths
CONFIG_DIR = "configs"
MONITOR_SETTINGS = f"{CONFIG_DIR}/monitor_settings.yml"
DEFAULT_LOG_FILE = "cloudwatch_monitor.log"

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_BACKUP_COUNT: Final[int] = 3


### AWS constants ###
# Instance metadata service
METADATA_BASE_URL: Final[str] = "http://169.254.169.254/latest"
METADATA_TOKEN_TTL_SECONDS: Final[int] = 21600
METADATA_TIMEOUT_SECONDS: Final[float] = 5.0

# botocore client limits
AWS_CONNECT_TIMEOUT_SECONDS: Final[int] = 10
AWS_READ_TIMEOUT_SECONDS: Final[int] = 30
AWS_MAX_ATTEMPTS: Final[int] = 3


### CloudWatch constants ###
CLOUDWATCH_NAMESPACE: Final[str] = "System/Windows"
EC2_NAMESPACE: Final[str] = "AWS/EC2"

# PutMetricData accepts at most 20 datums per call
MAX_METRIC_DATA_PER_CALL: Final[int] = 20


### Scheduler constants ###
DEFAULT_MONITOR_PERIOD_MINUTES: Final[int] = 1
MIN_WAIT_SECONDS: Final[float] = 0.05
