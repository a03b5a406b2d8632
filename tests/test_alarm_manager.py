"""Unit tests for alarm_engine (alarm building and provisioning)."""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import BotoCoreError, ClientError

from conftest import INSTANCE_ID, FakeEnumerator, make_config
from exceptions import AlarmProvisioningError, CollectionError, IdentityResolutionError
from identity import Identity
from alarm_engine import AlarmProvisioner, build_alarm_specs
from resource_discovery import Drive


# ── Helpers ──────────────────────────────────────────────────────────────────


def make_resolver(identity: Identity) -> MagicMock:
    resolver = MagicMock()
    resolver.resolve_instance_id.return_value = identity.instance_id
    resolver.resolve_display_name.return_value = identity.display_name
    resolver.resolve_region.return_value = identity.region
    resolver.identity.return_value = identity
    return resolver


def rejected():
    return ClientError(
        {"Error": {"Code": "LimitExceeded", "Message": "too many alarms"}},
        "PutMetricAlarm",
    )


# ── build_alarm_specs ───────────────────────────────────────────────────────


class TestBuildAlarmSpecs:
    def test_names_follow_display_name_and_kind(self, identity, enumerator):
        specs = build_alarm_specs(
            make_config(all_flags=True), identity, enumerator.list_drives()
        )
        assert [s.name for s in specs] == [
            "web-01-disk-space-C",
            "web-01-disk-space-D",
            "web-01-physical-memory",
            "web-01-CPU-utilization",
            "web-01-status-check",
        ]

    def test_names_are_stable_across_runs(self, identity, enumerator):
        config = make_config(all_flags=True)
        first = build_alarm_specs(config, identity, enumerator.list_drives())
        second = build_alarm_specs(config, identity, enumerator.list_drives())
        assert first == second

    def test_fixed_utilization_policy(self, identity, enumerator):
        specs = build_alarm_specs(
            make_config(all_flags=True), identity, enumerator.list_drives()
        )
        disk = specs[0]
        assert disk.metric_name == "DiskSpaceUtilization"
        assert disk.namespace == "System/Windows"
        assert disk.dimensions == (("InstanceId", INSTANCE_ID), ("Drive", "C"))
        assert disk.statistic == "Average"
        assert disk.comparison_operator == "GreaterThanOrEqualToThreshold"
        assert disk.threshold == 85.0
        assert disk.period == 300
        assert disk.evaluation_periods == 1
        assert disk.unit.value == "Percent"

    def test_ec2_alarms(self, identity):
        specs = build_alarm_specs(make_config(all_flags=False), identity, [])
        cpu, status = specs
        assert cpu.namespace == status.namespace == "AWS/EC2"
        assert cpu.metric_name == "CPUUtilization"
        assert status.metric_name == "StatusCheckFailed"
        assert status.threshold == 1.0
        assert status.unit.value == "Count"

    def test_optional_ec2_alarms_can_be_disabled(self, identity):
        config = make_config(
            all_flags=False,
            create_cpu_utilization_alarm=False,
            create_status_check_alarm=False,
        )
        assert build_alarm_specs(config, identity, []) == []

    def test_drive_filtering(self, identity):
        drives = [
            Drive("C:\\", True, 10, 5),
            Drive("D:\\", True, 10, 5),
            Drive("E:\\", False),
        ]
        config = make_config(
            all_flags=False,
            submit_disk_space_utilization=True,
            include_drives=("C", "E"),
            create_cpu_utilization_alarm=False,
            create_status_check_alarm=False,
        )
        specs = build_alarm_specs(config, identity, drives)
        assert [s.name for s in specs] == ["web-01-disk-space-C"]

    def test_sns_topics_become_alarm_actions(self, identity):
        topic = "arn:aws:sns:us-east-1:123456789012:ops"
        config = make_config(all_flags=False, alarm_sns_topics=(topic,))
        kwargs = build_alarm_specs(config, identity, [])[0].to_put_metric_alarm_kwargs()
        assert kwargs["AlarmActions"] == [topic]
        assert kwargs["ActionsEnabled"] is True

    def test_missing_display_name_is_rejected(self):
        with pytest.raises(AlarmProvisioningError):
            build_alarm_specs(
                make_config(all_flags=True), Identity(INSTANCE_ID, "us-east-1"), []
            )


# ── AlarmProvisioner ────────────────────────────────────────────────────────


class TestAlarmProvisioner:
    def test_deploys_every_alarm_in_order(self, identity, enumerator, session_manager):
        provisioner = AlarmProvisioner(
            make_resolver(identity), enumerator, session_manager
        )

        specs = provisioner.provision_alarms(make_config(all_flags=True))

        session_manager.get_client.assert_called_once_with("cloudwatch", "us-east-1")
        calls = session_manager.client.put_metric_alarm.call_args_list
        assert [c.kwargs["AlarmName"] for c in calls] == [s.name for s in specs]

    def test_identity_failure_deploys_nothing(
        self, identity, enumerator, session_manager
    ):
        resolver = make_resolver(identity)
        resolver.resolve_display_name.side_effect = IdentityResolutionError("denied")
        provisioner = AlarmProvisioner(resolver, enumerator, session_manager)

        with pytest.raises(IdentityResolutionError):
            provisioner.provision_alarms(make_config(all_flags=True))

        session_manager.client.put_metric_alarm.assert_not_called()

    def test_deploy_failure_aborts_remaining(
        self, identity, enumerator, session_manager
    ):
        session_manager.client.put_metric_alarm.side_effect = [None, rejected()]
        provisioner = AlarmProvisioner(
            make_resolver(identity), enumerator, session_manager
        )

        with pytest.raises(AlarmProvisioningError, match="web-01-disk-space-D"):
            provisioner.provision_alarms(make_config(all_flags=True))

        assert session_manager.client.put_metric_alarm.call_count == 2

    def test_dry_run_deploys_nothing(self, identity, enumerator, session_manager):
        provisioner = AlarmProvisioner(
            make_resolver(identity), enumerator, session_manager
        )

        specs = provisioner.provision_alarms(make_config(all_flags=True), dry_run=True)

        assert len(specs) == 5
        session_manager.get_client.assert_not_called()

    def test_client_setup_failure_is_provisioning_error(
        self, identity, enumerator, session_manager
    ):
        session_manager.get_client.side_effect = BotoCoreError()
        provisioner = AlarmProvisioner(
            make_resolver(identity), enumerator, session_manager
        )

        with pytest.raises(AlarmProvisioningError, match="CloudWatch client"):
            provisioner.provision_alarms(make_config(all_flags=True))

    def test_drive_listing_failure(self, identity, session_manager):
        enumerator = FakeEnumerator()
        enumerator.list_drives = MagicMock(side_effect=CollectionError("disk"))
        provisioner = AlarmProvisioner(
            make_resolver(identity), enumerator, session_manager
        )

        with pytest.raises(AlarmProvisioningError, match="Unable to list drives"):
            provisioner.provision_alarms(make_config(all_flags=True))

    def test_no_disk_alarm_skips_drive_listing(self, identity, session_manager):
        enumerator = FakeEnumerator()
        provisioner = AlarmProvisioner(
            make_resolver(identity), enumerator, session_manager
        )
        provisioner.provision_alarms(make_config(all_flags=False))
        assert enumerator.drive_calls == 0
