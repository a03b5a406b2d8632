# ====================================================
# Standard Library Imports
# ====================================================
import logging
from typing import Any, List, Sequence

from botocore.exceptions import BotoCoreError, ClientError

# ====================================================
# Internal Module Imports
# ====================================================
from constants import CLOUDWATCH_NAMESPACE, EC2_NAMESPACE
from exceptions import AlarmProvisioningError, CollectionError
from identity import Identity, IdentityResolver
from metric_engine.collector import ResourceEnumerator, drive_identifier
from metric_engine.metric_sample import Dimensions, MetricUnit
from monitor_config import MonitorConfig
from resource_discovery import Drive
from session import SessionManager
from .alarm_config import AlarmSpec
from .constants import *

# ====================================================
# Logger Setup
# ====================================================
logger = logging.getLogger(__name__)


# ====================================================
# Alarm Building Functions
# ====================================================
def build_alarm_spec(
    identity: Identity,
    kind: str,
    metric_name: str,
    namespace: str,
    dimensions: Dimensions,
    unit: MetricUnit,
    threshold: float,
    notification_targets: Sequence[str],
    description: str,
    distinct_value: str = "",
) -> AlarmSpec:
    """
    Helper to create an AlarmSpec with the fixed alarm policy.
    The name is {display_name}-{kind}[-{distinct_value}].
    """
    base_alarm_name = f"{identity.display_name}-{kind}"
    return AlarmSpec(
        name=f"{base_alarm_name}-{distinct_value}" if distinct_value else base_alarm_name,
        metric_name=metric_name,
        namespace=namespace,
        dimensions=dimensions,
        statistic=ALARM_STATISTIC,
        comparison_operator=ALARM_COMPARISON_OPERATOR,
        threshold=threshold,
        unit=unit,
        period=ALARM_PERIOD_SECONDS,
        evaluation_periods=ALARM_EVALUATION_PERIODS,
        notification_targets=tuple(notification_targets),
        actions_enabled=True,
        description=description,
    )


def build_alarm_specs(
    config: MonitorConfig, identity: Identity, drives: Sequence[Drive]
) -> List[AlarmSpec]:
    """
    Build every alarm the configuration calls for.

    Pure given its inputs: the same identity and drive set always produce the
    same alarm names, so re-provisioning overwrites rather than duplicates.
    """
    if not identity.instance_id or not identity.display_name:
        raise AlarmProvisioningError("Instance ID and name are required for alarms")

    instance_dims: Dimensions = (("InstanceId", identity.instance_id),)
    topics = config.alarm_sns_topics
    specs: List[AlarmSpec] = []

    if config.submit_disk_space_utilization:
        seen = set()
        for drive in drives:
            identifier = drive_identifier(drive.name)
            if not config.is_drive_included(identifier):
                logger.info(f"Not including drive: {identifier}")
                continue
            if not drive.is_ready or identifier in seen:
                continue
            seen.add(identifier)
            specs.append(
                build_alarm_spec(
                    identity,
                    DISK_SPACE_ALARM_KIND,
                    "DiskSpaceUtilization",
                    CLOUDWATCH_NAMESPACE,
                    instance_dims + (("Drive", identifier),),
                    MetricUnit.PERCENT,
                    UTILIZATION_THRESHOLD,
                    topics,
                    "Disk space utilization alarm",
                    distinct_value=identifier,
                )
            )

    if config.submit_physical_memory_utilization:
        specs.append(
            build_alarm_spec(
                identity,
                PHYSICAL_MEMORY_ALARM_KIND,
                "PhysicalMemoryUtilization",
                CLOUDWATCH_NAMESPACE,
                instance_dims,
                MetricUnit.PERCENT,
                UTILIZATION_THRESHOLD,
                topics,
                "Physical memory utilization alarm",
            )
        )

    if config.create_cpu_utilization_alarm:
        specs.append(
            build_alarm_spec(
                identity,
                CPU_UTILIZATION_ALARM_KIND,
                "CPUUtilization",
                EC2_NAMESPACE,
                instance_dims,
                MetricUnit.PERCENT,
                UTILIZATION_THRESHOLD,
                topics,
                "CPU utilization alarm",
            )
        )

    if config.create_status_check_alarm:
        specs.append(
            build_alarm_spec(
                identity,
                STATUS_CHECK_ALARM_KIND,
                "StatusCheckFailed",
                EC2_NAMESPACE,
                instance_dims,
                MetricUnit.COUNT,
                STATUS_CHECK_THRESHOLD,
                topics,
                "Status check alarm",
            )
        )

    return specs


# ====================================================
# AlarmProvisioner Class Definition
# ====================================================
class AlarmProvisioner:
    """
    Builds and deploys the threshold alarms for this instance.
    Runs on demand, separately from the polling loop.
    """

    def __init__(
        self,
        resolver: IdentityResolver,
        enumerator: ResourceEnumerator,
        session_manager: SessionManager,
    ) -> None:
        self.resolver = resolver
        self.enumerator = enumerator
        self.session_manager = session_manager

    # ----------------------------
    # Alarm Deployment Methods
    # ----------------------------
    def provision_alarms(
        self, config: MonitorConfig, dry_run: bool = False
    ) -> List[AlarmSpec]:
        """
        Resolve identity, build alarm specs and deploy them in order.

        Identity failures propagate as IdentityResolutionError. The first
        deployment failure aborts the remaining alarms.
        """
        self.resolver.resolve_instance_id()
        self.resolver.resolve_display_name()
        region = self.resolver.resolve_region()
        identity = self.resolver.identity()

        drives: List[Drive] = []
        if config.submit_disk_space_utilization:
            try:
                drives = self.enumerator.list_drives()
            except CollectionError as e:
                raise AlarmProvisioningError(f"Unable to list drives: {e}") from e

        specs = build_alarm_specs(config, identity, drives)
        logger.info(f"Total alarms generated for '{identity.display_name}': {len(specs)}")

        if dry_run:
            logger.info("Dry run mode enabled. No alarms will be deployed.")
            for spec in specs:
                logger.info(f"  {spec.name}: {spec.metric_name} >= {spec.threshold}")
            return specs

        try:
            cloudwatch = self.session_manager.get_client("cloudwatch", region)
        except BotoCoreError as e:
            logger.error(f"Unable to create CloudWatch client for {region}: {e}")
            raise AlarmProvisioningError(
                f"Unable to create CloudWatch client for {region}: {e}"
            ) from e

        for spec in specs:
            self._deploy_single_alarm(spec, cloudwatch)
        return specs

    def _deploy_single_alarm(self, spec: AlarmSpec, cloudwatch: Any) -> None:
        """
        Deploy a single alarm to CloudWatch using the put_metric_alarm API.
        """
        try:
            cloudwatch.put_metric_alarm(**spec.to_put_metric_alarm_kwargs())
            logger.info(f"Successfully deployed alarm: {spec.name}")
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to deploy alarm {spec.name}: {e}")
            raise AlarmProvisioningError(f"Failed to deploy alarm {spec.name}: {e}") from e


# ====================================================
# End of AlarmProvisioner Class
# ====================================================
