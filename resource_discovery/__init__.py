from .resource_scanner import ResourceScanner
from .resource_plugins.resource import Drive, MemoryCounters

__all__ = [
    "ResourceScanner",
    "Drive",
    "MemoryCounters",
]
