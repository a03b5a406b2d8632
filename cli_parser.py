import argparse
from typing import List, NamedTuple, Optional

from constants import DEFAULT_LOG_FILE, MONITOR_SETTINGS


class CliArgs(NamedTuple):
    action: str
    config: str
    log_file: str
    dry_run: bool


class CliParser:
    @staticmethod
    def parse_arguments(argv: Optional[List[str]] = None) -> CliArgs:
        parser = argparse.ArgumentParser(
            description="CloudWatch disk and memory monitor"
        )
        parser.add_argument(
            "--action",
            "-a",
            type=str,
            choices=["run", "service", "create-alarms"],
            required=True,
            help=(
                "Action to perform: 'run' (foreground, console output), "
                "'service' (unattended, logs to file) or 'create-alarms'."
            ),
        )
        parser.add_argument(
            "--config",
            "-c",
            type=str,
            default=MONITOR_SETTINGS,
            help="Path to the monitor settings YAML file.",
        )
        parser.add_argument(
            "--log-file",
            type=str,
            default=DEFAULT_LOG_FILE,
            help="Log file used by the 'service' action.",
        )
        parser.add_argument(
            "--dry-run",
            "-dr",
            action="store_true",
            help="Build alarms without deploying them (create-alarms only).",
        )
        args = parser.parse_args(argv)
        return CliArgs(
            action=args.action,
            config=args.config,
            log_file=args.log_file,
            dry_run=args.dry_run,
        )

    @staticmethod
    def is_interactive(args: CliArgs) -> bool:
        """Only the 'service' action runs unattended."""
        return args.action != "service"
