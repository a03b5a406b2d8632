import logging
from typing import Optional

from identity import IdentityResolver
from metric_engine import BatchSubmitter, MetricCollector
from metric_engine.collector import ResourceEnumerator
from monitor_config import MonitorConfig
from session import SessionManager

logger = logging.getLogger(__name__)


class MonitorService:
    """One collect-then-submit pass, driven by the scheduler."""

    def __init__(
        self,
        config: MonitorConfig,
        resolver: IdentityResolver,
        enumerator: ResourceEnumerator,
        session_manager: SessionManager,
    ) -> None:
        self.config = config
        self.resolver = resolver
        self.collector = MetricCollector(enumerator)
        self.session_manager = session_manager

    def update_metrics(self) -> None:
        """Collect a fresh set of samples and send them to CloudWatch.

        Raises on any failure; identity lookups that fail here are retried on
        the next cycle because nothing is cached on failure.
        """
        self.resolver.resolve_instance_id()
        region = self.resolver.resolve_region()

        samples = self.collector.collect(self.config, self.resolver.identity())

        submitter = BatchSubmitter(self.session_manager.get_client("cloudwatch", region))
        submitter.submit(samples)

    def run_cycle(self) -> Optional[Exception]:
        """Run update_metrics and hand back the error instead of raising it."""
        try:
            self.update_metrics()
        except Exception as e:
            return e
        return None
