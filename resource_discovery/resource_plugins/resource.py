from dataclasses import dataclass


@dataclass(frozen=True)
class Drive:
    name: str  # Mount point or drive root, e.g. "C:\\" or "/data"
    is_ready: bool
    total_bytes: int = 0
    available_bytes: int = 0


@dataclass(frozen=True)
class MemoryCounters:
    available_physical: float
    total_physical: float
    available_virtual: float
    total_virtual: float
