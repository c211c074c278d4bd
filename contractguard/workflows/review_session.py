"""
Review workflow for a single user session.

landing -> input -> email -> analyzing -> results, with back and start-over
transitions. The only suspension points are the PDF upload and the analysis
request; both are tagged with the session generation at dispatch so that a
response arriving after a start-over cannot overwrite the new session.
"""

from enum import Enum
from typing import Optional

import structlog

from ..models.schemas import AnalysisResult
from ..services.api_client import AnalysisBackend, BackendError
from ..views.contract_input import ContractInputForm, PdfUpload
from ..views.email_capture import EmailCaptureForm
from ..views.results import ResultsView

logger = structlog.get_logger()

ANALYSIS_FAILED_MESSAGE = "Analysis failed. Please try again."


class Step(str, Enum):
    LANDING = "landing"
    INPUT = "input"
    EMAIL = "email"
    ANALYZING = "analyzing"
    RESULTS = "results"


class InvalidTransitionError(RuntimeError):
    """An action was taken from a step that does not offer it."""

    def __init__(self, action: str, step: Step):
        super().__init__(f"Cannot {action} while in the {step.value} step")
        self.action = action
        self.step = step


class ReviewSession:
    """
    State machine driving one contract review.

    Usage:
        session = ReviewSession(backend=ContractGuardClient(base_url))
        session.get_started()
        session.contract_form.set_text(contract)
        session.submit_contract()
        await session.submit_email("me@example.com")
        if session.step is Step.RESULTS:
            print(session.results_view.render_text())
    """

    def __init__(self, backend: AnalysisBackend):
        self.backend = backend
        self.generation = 0
        self._reset()

    def _reset(self) -> None:
        self.step = Step.LANDING
        self.contract_form = ContractInputForm()
        self.email_form = EmailCaptureForm()
        self.contract_text = ""
        self.email = ""
        self.analysis_result: Optional[AnalysisResult] = None
        self.error: Optional[str] = None

    def _require(self, action: str, *steps: Step) -> None:
        if self.step not in steps:
            raise InvalidTransitionError(action, self.step)

    def _analysis_failed(self) -> bool:
        self.error = ANALYSIS_FAILED_MESSAGE
        self.step = Step.INPUT
        return False

    def _is_stale(self, generation: int, operation: str) -> bool:
        if generation != self.generation:
            logger.info(
                "stale_response_discarded",
                operation=operation,
                dispatched_generation=generation,
                current_generation=self.generation
            )
            return True
        return False

    @property
    def results_view(self) -> Optional[ResultsView]:
        if self.analysis_result is None:
            return None
        return ResultsView.from_result(self.analysis_result)

    def get_started(self) -> None:
        self._require("get started", Step.LANDING)
        self.step = Step.INPUT

    def back(self) -> None:
        """Back from input returns home (full reset); back from email returns to input."""
        self._require("go back", Step.INPUT, Step.EMAIL)
        if self.step is Step.INPUT:
            self.start_over()
        else:
            self.step = Step.INPUT

    def start_over(self) -> None:
        """Discard everything and return to the landing step."""
        self.generation += 1
        self._reset()
        logger.debug("session_reset", generation=self.generation)

    async def upload_pdf(self, upload: PdfUpload) -> bool:
        """
        Extract a PDF into the contract text.

        Returns:
            True when the text was filled in, False on rejection, failure or
            when the session was restarted while the extraction ran
        """
        self._require("upload a PDF", Step.INPUT)
        generation = self.generation

        # The form is captured here: a start-over swaps in a fresh one, so a
        # late extraction lands on the discarded form.
        form = self.contract_form
        ok = await form.upload(upload, self.backend)

        if self._is_stale(generation, "upload"):
            return False
        return ok

    def submit_contract(self) -> bool:
        """
        Move to email capture when the contract text is long enough.

        Returns:
            True on transition, False when the form rejected the text
        """
        self._require("submit a contract", Step.INPUT)

        submission = self.contract_form.submit()
        if submission is None:
            return False

        self.contract_text = submission.text
        self.step = Step.EMAIL
        return True

    async def submit_email(self, address: Optional[str] = None) -> bool:
        """
        Validate the email, then request the analysis.

        The step moves to analyzing before the request is sent. Success moves
        to results; any failure moves back to input with an error banner.

        Returns:
            True when results are available
        """
        self._require("submit an email", Step.EMAIL)

        lead = self.email_form.submit(address)
        if lead is None:
            return False

        self.email = lead.address
        self.step = Step.ANALYZING
        self.error = None
        generation = self.generation

        logger.info("analysis_requested", generation=generation)

        try:
            result = await self.backend.analyze(self.contract_text, lead.address)
        except BackendError as e:
            if self._is_stale(generation, "analyze"):
                return False
            logger.warning("analysis_request_failed", error=str(e), status_code=e.status_code)
            return self._analysis_failed()
        except Exception:
            if self._is_stale(generation, "analyze"):
                return False
            logger.exception("analysis_request_crashed")
            return self._analysis_failed()

        if self._is_stale(generation, "analyze"):
            return False

        self.analysis_result = result
        self.step = Step.RESULTS
        return True
