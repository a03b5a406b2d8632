"""Shared pytest fixtures used across all test modules."""

import os
import sys
from typing import List, Optional
from unittest.mock import MagicMock

import pytest

# Make the flat top-level modules importable without installing the project
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from identity import Identity  # noqa: E402
from monitor_config import DISK_FLAGS, MEMORY_FLAGS, MonitorConfig  # noqa: E402
from resource_discovery import Drive, MemoryCounters  # noqa: E402

INSTANCE_ID = "i-0123456789abcdef0"


class FakeEnumerator:
    """In-memory stand-in for ResourceScanner."""

    def __init__(
        self,
        drives: Optional[List[Drive]] = None,
        memory: Optional[MemoryCounters] = None,
    ) -> None:
        self.drives = drives or []
        self.memory = memory or MemoryCounters(
            available_physical=2_000.0,
            total_physical=8_000.0,
            available_virtual=6_000.0,
            total_virtual=12_000.0,
        )
        self.drive_calls = 0
        self.memory_calls = 0

    def list_drives(self) -> List[Drive]:
        self.drive_calls += 1
        return list(self.drives)

    def read_memory(self) -> MemoryCounters:
        self.memory_calls += 1
        return self.memory


def make_config(all_flags: Optional[bool] = None, **overrides) -> MonitorConfig:
    """Build a MonitorConfig; `all_flags` sets every submit_* flag first."""
    settings = {}
    if all_flags is not None:
        settings.update({flag: all_flags for flag in DISK_FLAGS + MEMORY_FLAGS})
    settings.update(overrides)
    return MonitorConfig(**settings)


@pytest.fixture
def identity() -> Identity:
    return Identity(instance_id=INSTANCE_ID, region="us-east-1", display_name="web-01")


@pytest.fixture
def enumerator() -> FakeEnumerator:
    return FakeEnumerator(
        drives=[
            Drive("C:\\", True, total_bytes=100, available_bytes=15),
            Drive("D:\\", True, total_bytes=50, available_bytes=50),
        ]
    )


@pytest.fixture
def session_manager() -> MagicMock:
    """SessionManager double handing out one shared client mock."""
    manager = MagicMock()
    manager.client = MagicMock()
    manager.get_client.return_value = manager.client
    return manager
