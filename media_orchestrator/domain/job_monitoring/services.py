"""
Job Monitoring Services

Pure classification of job and job output failure state.
"""

from .entities import Job, JobOutput
from .value_objects import MIN_TIMESTAMP, JobOutputStatus


class RetryClassifier:
    """
    Domain service deciding whether a failed encoding job should be resubmitted.

    Classification never raises: every input resolves to a boolean or a
    state/timestamp pair. An errored output without an error descriptor is
    treated as not retriable.
    """

    def is_job_retriable(self, job: Job, asset_name: str) -> bool:
        """
        Decide retry eligibility for the output written to one asset.

        Args:
            job: Polled job object
            asset_name: Output asset name (case-insensitive)

        Returns:
            True only when the job is in error and the first errored asset
            output with a matching name is flagged MayRetry
        """
        if not job.is_error():
            return False

        for output in job.asset_outputs():
            if output.is_error() and output.matches_asset(asset_name):
                return self.is_output_retriable(output)

        return False

    def is_output_retriable(self, output: JobOutput) -> bool:
        """
        Decide retry eligibility for a single output, as delivered by a
        state-change event. There is no outer job state to check.
        """
        if not output.is_error():
            return False
        if output.error is None:
            return False
        return output.error.may_retry()

    def get_job_output_state(self, job: Job, asset_name: str) -> JobOutputStatus:
        """
        Return the state of the output written to an asset and when it was reached.

        The timestamp is the output end time, else its start time, else the
        job's last modification time. Callers order status transitions by it.

        Returns:
            JobOutputStatus, or JobOutputStatus.unknown() if no output matches
        """
        for output in job.asset_outputs():
            if output.matches_asset(asset_name):
                fallback = job.last_modified or MIN_TIMESTAMP
                return JobOutputStatus(output.state, output.status_time(fallback))

        return JobOutputStatus.unknown()
