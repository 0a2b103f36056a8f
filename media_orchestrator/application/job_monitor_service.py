"""
Job Monitor Application Service

Evaluates polled jobs and job-output state-change events for retry.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from media_orchestrator.domain.job_monitoring import Job, JobOutputAsset, RetryClassifier

logger = logging.getLogger(__name__)

SUBSCRIPTION_VALIDATION_EVENT = "Microsoft.EventGrid.SubscriptionValidationEvent"

# Progress events share the JobOutput prefix but carry no output object
JOB_OUTPUT_STATE_CHANGE_EVENTS = frozenset({
    "Microsoft.Media.JobOutputStateChange",
    "Microsoft.Media.JobOutputScheduled",
    "Microsoft.Media.JobOutputProcessing",
    "Microsoft.Media.JobOutputCanceling",
    "Microsoft.Media.JobOutputCanceled",
    "Microsoft.Media.JobOutputFinished",
    "Microsoft.Media.JobOutputErrored",
})

EventPayload = Union[Dict[str, Any], List[Dict[str, Any]]]


def _as_event_list(payload: EventPayload) -> List[Dict[str, Any]]:
    events = payload if isinstance(payload, list) else [payload]
    for event in events:
        if not isinstance(event, dict):
            raise ValueError("Each event must be an object")
    return events


class JobMonitorService:
    """
    Application service for job status evaluation.

    Returns retry decisions to the caller; resubmission is left to the
    orchestrator that owns the job.
    """

    def __init__(self, retry_classifier: RetryClassifier):
        """
        Initialize JobMonitorService.

        Args:
            retry_classifier: RetryClassifier domain service
        """
        self.retry_classifier = retry_classifier

    def evaluate_job(self, job_data: Dict[str, Any], asset_name: str) -> Dict[str, Any]:
        """
        Evaluate a polled job for the output written to one asset.

        Args:
            job_data: Job in its service representation
            asset_name: Output asset name

        Returns:
            Dictionary with retriable flag, output state, state timestamp and
            whether that state is terminal

        Raises:
            ValueError: If the job payload cannot be parsed
        """
        job = Job.from_dict(job_data)
        retriable = self.retry_classifier.is_job_retriable(job, asset_name)
        status = self.retry_classifier.get_job_output_state(job, asset_name)

        if retriable:
            logger.info(f"Job {job.name} output {asset_name} failed with a retriable error")
        elif job.is_error():
            logger.info(f"Job {job.name} output {asset_name} failed and should not be retried")

        return {
            "job_name": job.name,
            "asset_name": asset_name,
            "retriable": retriable,
            "terminal": status.is_known() and status.state.is_terminal(),
            **status.to_dict(),
        }

    def evaluate_output_event(self, event: Dict[str, Any]) -> Dict[str, Any]:
        """
        Evaluate a single job-output state-change event.

        Accepts either the full event envelope (with 'data') or its data
        section alone.

        Raises:
            ValueError: If the event carries no job output
        """
        if not isinstance(event, dict):
            raise ValueError("Event must be an object")

        data = event.get("data") if isinstance(event.get("data"), dict) else event
        output = JobOutputAsset.from_event_data(data)
        retriable = self.retry_classifier.is_output_retriable(output)

        logger.debug(
            f"Job output event for asset {output.asset_name}: "
            f"state={output.state.value if output.state else None}, retriable={retriable}"
        )

        return {
            "asset_name": output.asset_name,
            "state": output.state.value if output.state else None,
            "retriable": retriable,
            "terminal": output.state is not None and output.state.is_terminal(),
        }

    def validation_response(self, payload: EventPayload) -> Optional[Dict[str, Any]]:
        """
        Answer a subscription validation handshake.

        Returns:
            {"validationResponse": code} when the delivery holds a validation
            event, otherwise None

        Raises:
            ValueError: If the payload holds something other than objects
        """
        for event in _as_event_list(payload):
            if event.get("eventType") == SUBSCRIPTION_VALIDATION_EVENT:
                logger.info("Answering event subscription validation handshake")
                return {"validationResponse": (event.get("data") or {}).get("validationCode")}
        return None

    def job_output_events(self, payload: EventPayload) -> List[Dict[str, Any]]:
        """
        Select the job-output state-change events of a delivery.

        Events without an 'eventType' are taken as job-output events; every
        other event type, progress events included, is skipped.

        Raises:
            ValueError: If the payload holds something other than objects
        """
        selected = []
        for event in _as_event_list(payload):
            event_type = event.get("eventType")
            if event_type is None or event_type in JOB_OUTPUT_STATE_CHANGE_EVENTS:
                selected.append(event)
            else:
                logger.debug(f"Skipping event of type {event_type}")
        return selected

    def handle_events(self, payload: EventPayload) -> Dict[str, Any]:
        """
        Handle an event delivery: one event or a batch of events.

        Returns:
            {"validationResponse": code} for a validation handshake,
            otherwise {"results": [...]} with one entry per job-output
            state-change event

        Raises:
            ValueError: If the payload or a state-change event is malformed
        """
        validation = self.validation_response(payload)
        if validation is not None:
            return validation

        return {
            "results": [self.evaluate_output_event(event) for event in self.job_output_events(payload)]
        }
