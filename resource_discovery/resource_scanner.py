import importlib
import logging
from typing import Any, Dict, List

from exceptions import CollectionError
from .resource_plugins.resource import Drive, MemoryCounters

logger = logging.getLogger(__name__)

supported_resources = ["disk", "memory"]


class ResourceScanner:
    """Front door to the local resource plugins."""

    def __init__(self) -> None:
        self.plugins = self._load_plugins()

    def _load_plugins(self) -> Dict[str, Any]:
        plugins = {}

        for resource in supported_resources:
            try:
                module = importlib.import_module(
                    f".resource_plugins.{resource}_plugin", package=__package__
                )
                plugin_class = getattr(module, f"{resource.upper()}Plugin")
                plugins[resource] = plugin_class()
            except ImportError as e:
                logger.error(f"Failed to load plugin for {resource}: {e}")
            except AttributeError as e:
                logger.error(f"Plugin class not found for {resource}: {e}")

        return plugins

    def _discover(self, resource: str) -> Any:
        if resource not in self.plugins:
            raise CollectionError(f"Unsupported resource: {resource}")

        try:
            return self.plugins[resource].discover()
        except CollectionError:
            raise
        except Exception as e:
            raise CollectionError(f"Error scanning {resource}: {e}") from e

    def list_drives(self) -> List[Drive]:
        return self._discover("disk")

    def read_memory(self) -> MemoryCounters:
        return self._discover("memory")
