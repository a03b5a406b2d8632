import logging
from typing import Dict

from botocore.exceptions import BotoCoreError, ClientError

from exceptions import IdentityResolutionError
from session import SessionManager

logger = logging.getLogger(__name__)


class InstanceDescribeClient:
    """Looks up an EC2 instance's tags with DescribeInstances."""

    def __init__(self, session_manager: SessionManager) -> None:
        self.session_manager = session_manager

    def get_instance_tags(self, instance_id: str, region: str) -> Dict[str, str]:
        try:
            client = self.session_manager.get_client("ec2", region)
            response = client.describe_instances(InstanceIds=[instance_id])
        except (BotoCoreError, ClientError) as e:
            raise IdentityResolutionError(
                f"Failed to describe instance {instance_id} in {region}: {e}"
            ) from e

        instances = [
            instance
            for reservation in response.get("Reservations", [])
            for instance in reservation.get("Instances", [])
        ]
        if not instances:
            raise IdentityResolutionError(
                f"Instance {instance_id} not found in {region}"
            )

        return {
            tag["Key"]: tag["Value"]
            for tag in instances[0].get("Tags", [])
            if tag.get("Key") and tag.get("Value") is not None
        }
