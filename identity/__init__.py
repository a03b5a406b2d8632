from .describe_client import InstanceDescribeClient
from .metadata_client import InstanceMetadataClient
from .resolver import Identity, IdentityResolver, region_from_availability_zone

__all__ = [
    "Identity",
    "IdentityResolver",
    "InstanceDescribeClient",
    "InstanceMetadataClient",
    "region_from_availability_zone",
]
