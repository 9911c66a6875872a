"""Client for the prediction (asynchronous model run) API used for speech."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

import httpx

from grouchy.clients.base import ServiceClient
from grouchy.config.logging import get_logger
from grouchy.errors import MalformedResponse

if TYPE_CHECKING:
    from grouchy.voice.params import SynthesisRequestParameters

logger = get_logger("clients.predictions")


class JobStatus(str, Enum):
    """Lifecycle of a prediction."""

    STARTING = "starting"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELED = "canceled"

    @property
    def is_pending(self) -> bool:
        return self in (JobStatus.STARTING, JobStatus.PROCESSING)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SynthesisJob:
    """Snapshot of a prediction as last reported by the service.

    Attributes:
        id: Opaque prediction identifier.
        status: Current lifecycle state.
        output: Audio URL once the job succeeded, else None.
    """

    id: str
    status: JobStatus
    output: str | None = None

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        default_status: JobStatus | None = None,
        default_id: str | None = None,
    ) -> SynthesisJob:
        """Build a job from a prediction document.

        Status documents may omit the id; pass the id that was polled as
        ``default_id`` to accept them.

        Raises:
            MalformedResponse: no id is available or the status is unknown.
        """
        job_id = data.get("id") or default_id
        if not isinstance(job_id, str) or not job_id:
            raise MalformedResponse("Prediction response has no id")

        raw_status = data.get("status")
        if raw_status is None and default_status is not None:
            status = default_status
        else:
            try:
                status = JobStatus(raw_status)
            except ValueError as exc:
                raise MalformedResponse(f"Unknown prediction status: {raw_status!r}") from exc

        output = data.get("output")
        return cls(id=job_id, status=status, output=output if isinstance(output, str) and output else None)


class PredictionsClient(ServiceClient):
    """Creates predictions for one model version and reads them back."""

    def __init__(
        self,
        base_url: str,
        api_token: str,
        model_version: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(base_url, api_token, timeout=timeout, transport=transport)
        self.model_version = model_version

    async def create(self, params: SynthesisRequestParameters) -> SynthesisJob:
        """Submit a synthesis job; the service answers before the audio exists.

        Raises:
            TransportError: the request failed or returned non-2xx.
            MalformedResponse: no job id could be read from the answer.
        """
        response = await self.request(
            "POST",
            "/predictions",
            json={"version": self.model_version, "input": params.to_input()},
        )
        job = SynthesisJob.from_dict(self.json(response), default_status=JobStatus.STARTING)
        logger.info(f"Prediction created with status {job.status}", extra={"job_id": job.id})
        return job

    async def get(self, job_id: str) -> SynthesisJob:
        """Fetch the current state of a prediction.

        Raises:
            TransportError: the request failed or returned non-2xx.
            MalformedResponse: the status document could not be read.
        """
        response = await self.request("GET", f"/predictions/{job_id}")
        return SynthesisJob.from_dict(self.json(response), default_id=job_id)
