import logging
import signal
import sys
from pathlib import Path
from typing import List, Optional

# Internal Module Imports
from alarm_engine import AlarmProvisioner
from cli_parser import CliArgs, CliParser
from exceptions import MonitorError
from identity import IdentityResolver, InstanceDescribeClient, InstanceMetadataClient
from logger import LoggerSetup
from monitor_config import MonitorConfig, load_monitor_config
from monitor_service import MonitorService
from resource_discovery import ResourceScanner
from scheduler import MonitorScheduler, SchedulerState
from session import SessionManager
from utils import validate_config_paths

# Constants & Config
from constants import LOG_FORMAT

BASE_DIR = Path(__file__).parent


def resolve_config_path(config: str) -> Path:
    """Relative paths that don't exist from the cwd are tried next to this file."""
    path = Path(config)
    if not path.is_absolute() and not path.exists():
        path = BASE_DIR / path
    return path


def load_config(config_path: Path, logger: logging.Logger) -> MonitorConfig:
    validate_config_paths({"monitor_settings": config_path}, logger)
    return load_monitor_config(config_path)


def build_resolver(
    config: MonitorConfig, session_manager: SessionManager
) -> IdentityResolver:
    return IdentityResolver(
        metadata_client=InstanceMetadataClient(),
        describe_client=InstanceDescribeClient(session_manager),
        instance_id=config.instance_id,
        region=config.region,
    )


def build_service(config: MonitorConfig) -> MonitorService:
    session_manager = SessionManager(config.aws_access_key, config.aws_secret_key)
    return MonitorService(
        config=config,
        resolver=build_resolver(config, session_manager),
        enumerator=ResourceScanner(),
        session_manager=session_manager,
    )


def run_monitor(args: CliArgs, logger: logging.Logger) -> int:
    """
    Run the polling loop until SIGINT/SIGTERM. Interactive runs stay on the
    main thread; the unattended service runs the loop on a worker thread.
    """
    config_path = resolve_config_path(args.config)
    scheduler = MonitorScheduler(
        config_loader=lambda: load_config(config_path, logger),
        service_factory=build_service,
    )

    def handle_stop(signum, frame) -> None:
        logger.info(f"Received signal {signum}, stopping")
        scheduler.stop()

    signal.signal(signal.SIGINT, handle_stop)
    signal.signal(signal.SIGTERM, handle_stop)

    if CliParser.is_interactive(args):
        return 0 if scheduler.run() else 1

    if not scheduler.start():
        return 1
    while scheduler.state is not SchedulerState.STOPPED:
        scheduler.join(timeout=1.0)
    return 0


def create_alarms(args: CliArgs, logger: logging.Logger) -> int:
    """Re-read the configuration and provision alarms once."""
    try:
        config = load_config(resolve_config_path(args.config), logger)
        session_manager = SessionManager(config.aws_access_key, config.aws_secret_key)
        provisioner = AlarmProvisioner(
            resolver=build_resolver(config, session_manager),
            enumerator=ResourceScanner(),
            session_manager=session_manager,
        )
        specs = provisioner.provision_alarms(config, dry_run=args.dry_run)
    except MonitorError as e:
        logger.error(f"Error creating alarms: {e}")
        return 1

    logger.info(f"Completed alarm provisioning: {len(specs)} alarms")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    # Parse CLI arguments using CliParser
    args: CliArgs = CliParser.parse_arguments(argv)

    # Initialize logger (configured once)
    logger = LoggerSetup(
        LOG_FORMAT,
        interactive=CliParser.is_interactive(args),
        log_file=args.log_file,
    ).get_logger("main")
    logger.info(f"Starting action: {args.action}")

    if args.action == "create-alarms":
        return create_alarms(args, logger)
    return run_monitor(args, logger)


if __name__ == "__main__":
    sys.exit(main())
