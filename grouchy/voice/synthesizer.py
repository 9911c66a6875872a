"""Speech synthesis by polling a prediction job under a time budget.

The prediction service runs the TTS model as a background job: creating it
only returns an id, and the audio URL shows up on the job once it has
succeeded. Polling stops on a terminal status or when the budget runs out;
running out is an ordinary "no audio" result, not an error.
"""

from __future__ import annotations

import asyncio

from grouchy.clients.predictions import JobStatus, PredictionsClient, SynthesisJob
from grouchy.config.logging import get_logger
from grouchy.errors import MalformedResponse
from grouchy.voice.params import SynthesisRequestParameters

logger = get_logger("voice.synthesizer")

DEFAULT_TIMEOUT = 8.0
DEFAULT_POLL_INTERVAL = 1.0


class SpeechSynthesizer:
    """Turns text into an audio URL, or None when no audio is available in time."""

    def __init__(
        self,
        client: PredictionsClient,
        params: SynthesisRequestParameters | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self.client = client
        self.params = params or SynthesisRequestParameters()
        self.timeout = timeout
        self.poll_interval = poll_interval

    async def synthesize(
        self,
        text: str,
        params: SynthesisRequestParameters | None = None,
        timeout: float | None = None,
    ) -> str | None:
        """Synthesize ``text`` and return the URL of the audio.

        The budget covers the whole call and is not reset between polls. A
        status request still in flight when it runs out is abandoned.

        Args:
            text: Text to speak
            params: Voice parameters (defaults to the synthesizer's)
            timeout: Budget in seconds (defaults to the synthesizer's)

        Returns:
            Audio URL, or None on failure, cancellation, timeout or empty output

        Raises:
            MalformedResponse: the job id could not be read from the creation answer
            TransportError: network failure or non-2xx while creating or polling
        """
        budget = self.timeout if timeout is None else timeout
        loop = asyncio.get_running_loop()
        deadline = loop.time() + budget

        request = (params or self.params).with_text(text)
        job = await self.client.create(request)

        while job.status.is_pending:
            remaining = deadline - loop.time()
            if remaining <= 0:
                return self._timed_out(job, budget)

            await asyncio.sleep(min(self.poll_interval, remaining))

            remaining = deadline - loop.time()
            if remaining <= 0:
                return self._timed_out(job, budget)

            try:
                job = await asyncio.wait_for(self.client.get(job.id), timeout=remaining)
            except asyncio.TimeoutError:
                return self._timed_out(job, budget)
            except MalformedResponse as exc:
                logger.warning(f"Unreadable prediction status, skipping audio: {exc}", extra={"job_id": job.id})
                return None

            logger.debug(f"Prediction status {job.status}", extra={"job_id": job.id})

        return self._resolve(job)

    @staticmethod
    def _timed_out(job: SynthesisJob, budget: float) -> None:
        logger.info(f"Synthesis not ready after {budget:.1f}s, skipping audio", extra={"job_id": job.id})
        return None

    @staticmethod
    def _resolve(job: SynthesisJob) -> str | None:
        if job.status == JobStatus.SUCCEEDED:
            if job.output:
                logger.info("Synthesis succeeded", extra={"job_id": job.id})
                return job.output
            logger.warning("Synthesis succeeded without output", extra={"job_id": job.id})
            return None

        logger.warning(f"Synthesis ended with status {job.status}", extra={"job_id": job.id})
        return None
