"""FutureGraph workflow service.

Orchestrates the ten-round diagnostic workflow over the domain services:

    process_round:  load -> progression check -> AI gateway (bounded)
                    -> parse -> QA validation -> versioned save
    submit_feedback: load -> approval gate -> versioned save
    generate_report: load -> report compiler -> mark completed

Concurrency:
- Operations on one session are serialized in-process by a per-session
  asyncio.Lock, so duplicate "process round N" calls run one after the
  other and the second becomes a reprocessing.
- Across processes every write is save(session, expected_version). On a
  version conflict the session is re-read, the checks are re-run on the
  fresh state and the mutation is re-applied, a bounded number of times.
  The analysis already produced is reused; the gateway is never called
  twice for one request.
- The gateway call is the only suspension point of substance. It is
  bounded by asyncio.wait_for; a timeout or cancellation leaves the
  stored session untouched.

Developer Golden Rules:
1. CHECK BEFORE CALLING - Progression is validated before the AI call
2. NO PARTIAL WRITES - A round is stored whole or not at all
3. NO AUTO-RETRY OF THE GATEWAY - Gateway failures go to the caller
4. LOG EVERYTHING - Every operation logs start, outcome and failures
"""

from __future__ import annotations

import asyncio
import weakref
from collections.abc import Callable, Mapping
from typing import Any
from uuid import uuid4

import structlog

from futuregraph.application.dtos.workflow import (
    FeedbackResult,
    LawDescription,
    RoundProcessingResult,
    RoundStatusView,
    SessionStatusView,
    SessionSummary,
)
from futuregraph.application.ports.analysis_gateway import (
    AnalysisGatewayProtocol,
    AnalysisRequest,
)
from futuregraph.application.ports.session_repository import (
    SessionRepositoryProtocol,
)
from futuregraph.application.ports.time_authority import TimeAuthorityProtocol
from futuregraph.application.services.base import LoggingMixin
from futuregraph.config.workflow_config import DEFAULT_WORKFLOW_CONFIG, WorkflowConfig
from futuregraph.domain.errors import (
    AnalysisParseError,
    ConcurrentModificationError,
    GatewayError,
    GatewayTimeoutError,
    MalformedGatewayOutputError,
    ProgressionError,
    SessionNotFoundError,
)
from futuregraph.domain.models.analysis import parse_analysis
from futuregraph.domain.models.language import normalize_language
from futuregraph.domain.models.law_registry import LAW_REGISTRY
from futuregraph.domain.models.phrasebook import law_description, law_name
from futuregraph.domain.models.report import FuturegraphReport
from futuregraph.domain.models.round_definitions import get_round_definition
from futuregraph.domain.models.session import Round, Session, SessionStatus
from futuregraph.domain.services.approval_gate import apply_feedback, feedback_message
from futuregraph.domain.services.law_validator import validate_analysis
from futuregraph.domain.services.progression_validator import (
    validate_round_progression,
)
from futuregraph.domain.services.report_compiler import compile_report
from futuregraph.infrastructure.monitoring.workflow_metrics import (
    WorkflowMetricsCollector,
    get_workflow_metrics_collector,
)

SESSION_ID_PREFIX = "fg_"


def generate_session_id() -> str:
    """Generate an opaque session identifier, e.g. "fg_3f2a...".

    Returns:
        "fg_" followed by 32 hex characters.
    """
    return f"{SESSION_ID_PREFIX}{uuid4().hex}"


class FuturegraphWorkflowService(LoggingMixin):
    """Service driving the multi-round FutureGraph analysis.

    Attributes:
        _repository: Session storage with versioned writes.
        _gateway: AI analysis provider.
        _time: Time authority for session and round timestamps.
        _config: Timeout and retry settings.
        _metrics: Prometheus workflow metrics.
        _locks: Per-session locks, dropped once no operation holds them.
    """

    def __init__(
        self,
        repository: SessionRepositoryProtocol,
        gateway: AnalysisGatewayProtocol,
        time_authority: TimeAuthorityProtocol,
        config: WorkflowConfig | None = None,
        metrics: WorkflowMetricsCollector | None = None,
    ) -> None:
        """Initialize the workflow service.

        Args:
            repository: Session storage.
            gateway: AI analysis provider.
            time_authority: Source of timestamps.
            config: Workflow settings (defaults to DEFAULT_WORKFLOW_CONFIG).
            metrics: Metrics collector (defaults to the process singleton).
        """
        self._repository = repository
        self._gateway = gateway
        self._time = time_authority
        self._config = config or DEFAULT_WORKFLOW_CONFIG
        self._metrics = metrics or get_workflow_metrics_collector()
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._init_logger(component="workflow")

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    async def start_session(
        self,
        user_id: str,
        client_id: str,
        image_ref: str,
        client_context: Mapping[str, Any] | None = None,
        language: str | None = None,
    ) -> Session:
        """Create a new active session with no rounds.

        Args:
            user_id: Owning therapist.
            client_id: Client being analyzed.
            image_ref: Handwriting image reference or base64 payload.
            client_context: Structured client metadata.
            language: Output language; unknown values fall back to English.

        Returns:
            The stored session (version 0).
        """
        session = Session(
            session_id=generate_session_id(),
            user_id=user_id,
            client_id=client_id,
            image_ref=image_ref,
            start_time=self._time.now(),
            client_context=dict(client_context or {}),
            language=normalize_language(language),
        )
        log = self._log_operation(
            "start_session",
            session_id=session.session_id,
            client_id=client_id,
            user_id=user_id,
        )
        stored = await self._repository.create(session)
        log.info("session_started", language=stored.language.value)
        return stored

    async def get_session(self, session_id: str) -> Session:
        """Load a session.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        session = await self._repository.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    # ------------------------------------------------------------------
    # Round processing
    # ------------------------------------------------------------------

    async def process_round(
        self,
        session_id: str,
        round_number: int,
        additional_context: Mapping[str, Any] | None = None,
        language: str | None = None,
    ) -> RoundProcessingResult:
        """Process (or reprocess) one round.

        Args:
            session_id: The session.
            round_number: Round to process (1..10).
            additional_context: Therapist-supplied context for the round.
            language: Optional language switch for this and later output.

        Returns:
            RoundProcessingResult with the stored analysis and QA verdict.

        Raises:
            ValueError: If round_number is outside 1..10.
            SessionNotFoundError: If the session does not exist.
            ProgressionError: If an ordering law blocks the round.
            GatewayTimeoutError: If the gateway call exceeded its bound.
            GatewayError: If the gateway failed (rate limited, unreachable).
            AnalysisParseError: If the gateway output had the wrong shape.
            ConcurrentModificationError: If version conflicts exhausted
                the retry budget.
        """
        get_round_definition(round_number)
        log = self._log_operation(
            "process_round", session_id=session_id, round_number=round_number
        )

        async with self._session_lock(session_id):
            session = await self.get_session(session_id)
            try:
                validate_round_progression(session, round_number)
            except ProgressionError as exc:
                log.info(
                    "round_progression_blocked",
                    law_id=exc.law_id,
                    blocking_round=exc.blocking_round,
                    reason=exc.reason,
                )
                self._metrics.record_progression_blocked(exc.law_id)
                raise
            output_language = (
                normalize_language(language) if language else session.language
            )
            reprocessed = session.has_round(round_number)
            log.info(
                "round_processing_started",
                reprocessing=reprocessed,
                language=output_language.value,
            )

            request = AnalysisRequest(
                round_number=round_number,
                image_ref=session.image_ref,
                client_context=session.client_context,
                additional_context=additional_context,
                prior_rounds=tuple(
                    r for r in session.rounds if r.round_number != round_number
                ),
                language=output_language,
            )
            raw = await self._call_gateway(request, log)

            try:
                analysis = parse_analysis(raw, round_number)
            except AnalysisParseError as exc:
                log.warning("analysis_parse_failed", problems=list(exc.problems))
                raise
            validation = validate_analysis(analysis, round_number, output_language)

            new_round = Round(
                round_number=round_number,
                analysis=analysis,
                qa_validation=validation,
                timestamp=self._time.now(),
                additional_context=(
                    dict(additional_context) if additional_context else None
                ),
            )

            def store_round(current: Session) -> Session:
                validate_round_progression(current, round_number)
                return current.with_language(output_language).with_round(new_round)

            await self._save_with_retry(session, store_round, log)

        self._metrics.record_round_processed(round_number, validation.passed)
        log.info(
            "round_stored",
            qa_passed=validation.passed,
            violation_count=len(validation.violations),
            warning_count=len(validation.warnings),
        )
        return RoundProcessingResult(
            session_id=session_id,
            round_number=round_number,
            analysis=analysis,
            validation=validation,
            reprocessed=reprocessed,
        )

    async def _call_gateway(
        self,
        request: AnalysisRequest,
        log: structlog.BoundLogger,
    ) -> Mapping[str, Any]:
        """Call the gateway with a timeout, translating its failures."""
        timeout = self._config.gateway_timeout_seconds
        started = self._time.monotonic()
        try:
            raw = await asyncio.wait_for(
                self._gateway.analyze_round(request), timeout=timeout
            )
        except asyncio.TimeoutError:
            log.warning("gateway_timeout", timeout_seconds=timeout)
            self._metrics.record_gateway_failure(GatewayTimeoutError.__name__)
            raise GatewayTimeoutError(request.round_number, timeout) from None
        except MalformedGatewayOutputError as exc:
            log.warning("gateway_output_malformed", error=str(exc))
            self._metrics.record_gateway_failure(type(exc).__name__)
            raise AnalysisParseError(
                request.round_number,
                [f"gateway output: {exc}"],
            ) from exc
        except GatewayError as exc:
            log.warning(
                "gateway_failed",
                error_type=type(exc).__name__,
                error=str(exc),
            )
            self._metrics.record_gateway_failure(type(exc).__name__)
            raise
        elapsed = self._time.monotonic() - started
        self._metrics.observe_gateway_duration(elapsed)
        log.debug("gateway_responded", elapsed_seconds=round(elapsed, 3))
        return raw

    # ------------------------------------------------------------------
    # Therapist feedback
    # ------------------------------------------------------------------

    async def submit_feedback(
        self,
        session_id: str,
        round_number: int,
        feedback: str | None,
        approved: bool,
        language: str | None = None,
    ) -> FeedbackResult:
        """Record a therapist decision on a stored round.

        Args:
            session_id: The session.
            round_number: The round being reviewed.
            feedback: Free-text feedback.
            approved: True to accept, False to request reprocessing.
            language: Optional language switch for later output.

        Returns:
            FeedbackResult with a localized confirmation message.

        Raises:
            SessionNotFoundError: If the session does not exist.
            RoundNotFoundError: If the round has not been processed.
            ConcurrentModificationError: If version conflicts exhausted
                the retry budget.
        """
        log = self._log_operation(
            "submit_feedback",
            session_id=session_id,
            round_number=round_number,
            approved=approved,
        )
        async with self._session_lock(session_id):
            session = await self.get_session(session_id)
            decided_at = self._time.now()

            def record_decision(current: Session) -> Session:
                if language:
                    current = current.with_language(normalize_language(language))
                return apply_feedback(
                    current, round_number, feedback, approved, decided_at
                )

            stored = await self._save_with_retry(session, record_decision, log)

        decided = stored.get_round(round_number)
        self._metrics.record_feedback(approved)
        log.info("feedback_recorded")
        return FeedbackResult(
            success=True,
            message=feedback_message(approved, stored.language),
            round_number=round_number,
            requires_reprocessing=(
                decided is not None and decided.requires_reprocessing
            ),
        )

    # ------------------------------------------------------------------
    # Status, listing and report
    # ------------------------------------------------------------------

    async def get_status(self, session_id: str) -> SessionStatusView:
        """Progress snapshot of a session.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        session = await self.get_session(session_id)
        return SessionStatusView(
            session_id=session.session_id,
            status=session.status.value,
            current_round=session.current_round,
            completed_rounds=session.approved_round_count,
            is_complete=session.is_complete,
            language=session.language.value,
            rounds=tuple(
                RoundStatusView(
                    number=r.round_number,
                    completed=r.therapist_approved,
                    requires_reprocessing=r.requires_reprocessing,
                    qa_passed=r.qa_validation.passed,
                    timestamp=r.timestamp,
                )
                for r in session.rounds
            ),
        )

    async def generate_report(self, session_id: str) -> FuturegraphReport:
        """Compile the final report and mark the session completed.

        Compiling again later is allowed and yields an equivalent report.

        Raises:
            SessionNotFoundError: If the session does not exist.
            IncompleteSessionError: If fewer than ten rounds are approved.
        """
        log = self._log_operation("generate_report", session_id=session_id)
        async with self._session_lock(session_id):
            session = await self.get_session(session_id)
            generated_at = self._time.now()
            report = compile_report(session, generated_at)

            if session.status != SessionStatus.COMPLETED:

                def mark_completed(current: Session) -> Session:
                    compile_report(current, generated_at)
                    return current.mark_completed(generated_at)

                stored = await self._save_with_retry(session, mark_completed, log)
                report = compile_report(stored, generated_at)
                log.info("session_completed")

        self._metrics.record_report_generated()
        log.info("report_generated", language=report.language)
        return report

    async def list_client_sessions(
        self, client_id: str, user_id: str
    ) -> list[SessionSummary]:
        """Summaries of a user's sessions for one client, newest first."""
        sessions = await self._repository.list_by_client(client_id, user_id)
        return [
            SessionSummary(
                session_id=s.session_id,
                client_id=s.client_id,
                status=s.status.value,
                current_round=s.current_round,
                completed_rounds=s.approved_round_count,
                language=s.language.value,
                start_time=s.start_time,
                completed_at=s.completed_at,
            )
            for s in sessions
        ]

    def describe_laws(self, language: str | None = None) -> list[LawDescription]:
        """The law catalog, localized, in registry order."""
        lang = normalize_language(language)
        return [
            LawDescription(
                id=law.id,
                name=law_name(law.id, lang),
                description=law_description(law.id, lang),
                kind=law.kind.value,
                enforced=law.is_enforced,
            )
            for law in LAW_REGISTRY
        ]

    # ------------------------------------------------------------------
    # Concurrency helpers
    # ------------------------------------------------------------------

    def _session_lock(self, session_id: str) -> asyncio.Lock:
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock

    async def _save_with_retry(
        self,
        session: Session,
        mutate: Callable[[Session], Session],
        log: structlog.BoundLogger,
    ) -> Session:
        """Apply a mutation and save it, re-reading on version conflicts.

        `mutate` re-runs its checks against whatever state it is given, so
        a retry validates against the fresh session rather than the stale
        one.

        Raises:
            ConcurrentModificationError: If every attempt lost the race.
            Whatever `mutate` raises on the fresh state.
        """
        current = session
        attempts = self._config.max_write_attempts
        attempt = 1
        while True:
            updated = mutate(current)
            try:
                return await self._repository.save(
                    updated, expected_version=current.version
                )
            except ConcurrentModificationError as exc:
                self._metrics.record_version_conflict(exhausted=attempt == attempts)
                if attempt == attempts:
                    log.error(
                        "version_conflict_exhausted",
                        attempts=attempts,
                        expected_version=exc.expected_version,
                        actual_version=exc.actual_version,
                    )
                    raise
                log.warning(
                    "version_conflict_retry",
                    attempt=attempt,
                    expected_version=exc.expected_version,
                    actual_version=exc.actual_version,
                )
                attempt += 1
                current = await self.get_session(session.session_id)
