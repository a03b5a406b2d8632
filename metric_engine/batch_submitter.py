import logging
from typing import Any, List, Sequence

from botocore.exceptions import BotoCoreError, ClientError

from constants import CLOUDWATCH_NAMESPACE, MAX_METRIC_DATA_PER_CALL
from exceptions import SubmissionError
from utils import chunked
from .metric_sample import MetricSample

logger = logging.getLogger(__name__)


class BatchSubmitter:
    """Sends samples to CloudWatch in PutMetricData-sized chunks.

    Chunks go out in order. The first failing chunk stops the submission:
    chunks already sent stay sent, the rest are dropped, nothing is retried.
    """

    def __init__(
        self,
        cloudwatch: Any,
        namespace: str = CLOUDWATCH_NAMESPACE,
        batch_size: int = MAX_METRIC_DATA_PER_CALL,
    ) -> None:
        if not 1 <= batch_size <= MAX_METRIC_DATA_PER_CALL:
            raise ValueError(
                f"batch_size must be between 1 and {MAX_METRIC_DATA_PER_CALL}"
            )
        self.cloudwatch = cloudwatch
        self.namespace = namespace
        self.batch_size = batch_size

    def submit(self, samples: Sequence[MetricSample]) -> None:
        if not samples:
            logger.info("No metric data to submit")
            return

        logger.info(f"Submitting {len(samples)} metric data points")
        batches: List[List[MetricSample]] = list(chunked(samples, self.batch_size))
        for index, batch in enumerate(batches, start=1):
            try:
                # The response carries nothing we use
                self.cloudwatch.put_metric_data(
                    Namespace=self.namespace,
                    MetricData=[sample.to_metric_datum() for sample in batch],
                )
            except (BotoCoreError, ClientError) as e:
                logger.error(f"Failed to submit batch {index}/{len(batches)}: {e}")
                raise SubmissionError(
                    f"Batch {index}/{len(batches)} rejected: {e}"
                ) from e
            logger.debug(f"Submitted batch {index}/{len(batches)} ({len(batch)} items)")

        logger.info("Done.")
