import psutil

from .base_plugin import BaseResourcePlugin
from .resource import MemoryCounters


class MEMORYPlugin(BaseResourcePlugin):
    """Reads physical and virtual memory counters.

    Virtual memory is the commit space: RAM plus swap. It is never smaller
    than physical memory, so it cannot be zero on a running host.
    """

    def discover(self) -> MemoryCounters:
        ram = psutil.virtual_memory()
        swap = psutil.swap_memory()

        return MemoryCounters(
            available_physical=float(ram.available),
            total_physical=float(ram.total),
            available_virtual=float(ram.available + swap.free),
            total_virtual=float(ram.total + swap.total),
        )
