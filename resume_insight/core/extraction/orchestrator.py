"""
Extraction orchestrator.

Drives one resume through the pipeline:

    pending -> processing -> completed | failed

Runs are handed to a worker pool. A resume has at most one run in flight
in this process, and every write after the processing claim is
conditional on the run's token, so a superseded run can never overwrite
a newer result.
"""

import threading
import uuid
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, Mapping, Optional

from bson import ObjectId

from resume_insight.core.exceptions import (
    ExtractionError,
    ExtractionInProgressError,
    InsufficientTextError,
    ResumeNotFoundError,
    UpstreamServiceError,
)
from resume_insight.data.models.base import utc_now
from resume_insight.data.models.profile import ExtractedProfile
from resume_insight.data.models.resume import ExtractionSnapshot, Resume
from resume_insight.data.repositories import (
    ResumeRepository,
    UserRepository,
    get_resume_repository,
    get_user_repository,
)
from resume_insight.ml.nlp import (
    BaseProfileParser,
    extract_text,
    get_heuristic_parser,
    get_llm_parser,
)
from resume_insight.services.profile_enhancer import ProfileEnhancer, enhance_user_profile
from resume_insight.utils.config import ExtractionSettings, get_settings
from resume_insight.utils.constants import AuditAction, ExtractionStatus, ParserStrategy
from resume_insight.utils.logger import audit_log, get_logger

logger = get_logger(__name__)

TextExtractor = Callable[[bytes, str, str], str]
FileLoader = Callable[[Resume], bytes]

_PARSER_FACTORIES: dict[ParserStrategy, Callable[[], BaseProfileParser]] = {
    ParserStrategy.HEURISTIC: get_heuristic_parser,
    ParserStrategy.LLM: get_llm_parser,
}


class ExtractionOrchestrator:
    """
    Runs resume extractions in the background and tracks their status.

    Collaborators are injectable; by default the MongoDB repositories, the
    document text extractor and a thread pool sized from settings are used.
    """

    def __init__(
        self,
        resume_repository: Optional[ResumeRepository] = None,
        user_repository: Optional[UserRepository] = None,
        parsers: Optional[Mapping[ParserStrategy, BaseProfileParser]] = None,
        text_extractor: Optional[TextExtractor] = None,
        file_loader: Optional[FileLoader] = None,
        enhancer: Optional[ProfileEnhancer] = None,
        executor: Optional[Executor] = None,
        settings: Optional[ExtractionSettings] = None,
    ):
        self.settings = settings or get_settings().extraction
        self.resume_repository = resume_repository or get_resume_repository()
        self.user_repository = user_repository or get_user_repository()
        self._parsers: dict[ParserStrategy, BaseProfileParser] = dict(parsers or {})
        self._text_extractor = text_extractor or extract_text
        self._file_loader = file_loader or self._read_upload
        self._enhancer = enhancer
        self._executor = executor or ThreadPoolExecutor(
            max_workers=self.settings.max_workers,
            thread_name_prefix="extraction",
        )

        self._in_flight: set[str] = set()
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Public interface
    # -------------------------------------------------------------------------

    def start_extraction(self, resume_id: str | ObjectId) -> Future:
        """
        Queue an extraction with the default strategy and return immediately.

        Raises:
            ResumeNotFoundError: No such resume
            ExtractionInProgressError: A run for this resume is already in flight
        """
        return self.reprocess(resume_id, self.settings.default_strategy)

    def reprocess(
        self,
        resume_id: str | ObjectId,
        strategy: ParserStrategy | str = ParserStrategy.HEURISTIC,
    ) -> Future:
        """
        Queue a new run for a resume, replacing its current profile when done.

        The returned future resolves to the run's ExtractionSnapshot.
        """
        strategy = ParserStrategy(strategy)
        key = str(resume_id)

        if self.resume_repository.get_by_id(key) is None:
            raise ResumeNotFoundError(key)

        with self._lock:
            if key in self._in_flight:
                logger.warning(f"Rejected extraction for {key}: a run is already in flight")
                raise ExtractionInProgressError(key)
            self._in_flight.add(key)

        try:
            future = self._executor.submit(self._run_claimed, key, strategy)
        except Exception:
            self._release(key)
            raise

        logger.info(f"Queued {strategy.value} extraction for resume {key}")
        return future

    def get_extraction(self, resume_id: str | ObjectId) -> ExtractionSnapshot:
        """Current status and, when completed, the extracted profile."""
        resume = self.resume_repository.get_by_id(str(resume_id))
        if resume is None:
            raise ResumeNotFoundError(str(resume_id))
        return ExtractionSnapshot.from_resume(resume)

    def is_running(self, resume_id: str | ObjectId) -> bool:
        with self._lock:
            return str(resume_id) in self._in_flight

    def get_parser(self, strategy: ParserStrategy | str) -> BaseProfileParser:
        strategy = ParserStrategy(strategy)
        if strategy not in self._parsers:
            self._parsers[strategy] = _PARSER_FACTORIES[strategy]()
        return self._parsers[strategy]

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting runs; optionally wait for queued ones to finish."""
        self._executor.shutdown(wait=wait)

    # -------------------------------------------------------------------------
    # Run
    # -------------------------------------------------------------------------

    def run_extraction(
        self,
        resume_id: str | ObjectId,
        strategy: ParserStrategy | str = ParserStrategy.HEURISTIC,
    ) -> ExtractionSnapshot:
        """
        Execute one run synchronously.

        Pipeline errors end the run in the failed status rather than
        propagating; only a missing resume raises.
        """
        strategy = ParserStrategy(strategy)
        key = str(resume_id)
        run_id = uuid.uuid4().hex

        resume = self.resume_repository.get_by_id(key)
        if resume is None or not self.resume_repository.mark_processing(key, run_id):
            raise ResumeNotFoundError(key)

        audit_log(
            AuditAction.EXTRACTION_STARTED.value,
            {"resume_id": key, "run_id": run_id, "strategy": strategy.value},
        )

        raw_text: Optional[str] = None
        try:
            raw_text = self._extract_raw_text(resume)
            if len(raw_text.strip()) < self.settings.min_text_length:
                raise InsufficientTextError(len(raw_text.strip()), self.settings.min_text_length)
            profile = self.get_parser(strategy).parse(raw_text)
        except ExtractionError as e:
            return self._fail(key, run_id, strategy, e.error_type, e.message, raw_text)
        except Exception as e:
            logger.exception(f"Unexpected error extracting resume {key}")
            return self._fail(key, run_id, strategy, type(e).__name__, str(e) or type(e).__name__, raw_text)

        completed = profile.finalize(
            ExtractionStatus.COMPLETED,
            utc_now(),
            raw_text=raw_text,
            strategy=strategy.value,
            error_message=None,
            error_type=None,
        )
        try:
            stored = self.resume_repository.complete_extraction(key, run_id, completed)
        except Exception as e:
            logger.exception(f"Could not store extraction for resume {key}")
            return self._fail(key, run_id, strategy, type(e).__name__, str(e) or type(e).__name__, raw_text)
        if not stored:
            return self._superseded(key, run_id)

        audit_log(
            AuditAction.EXTRACTION_COMPLETED.value,
            {
                "resume_id": key,
                "run_id": run_id,
                "strategy": strategy.value,
                "skills": len(completed.skills.all),
                "experience_years": completed.metadata.total_experience_years,
            },
        )
        logger.info(f"Extraction completed for resume {key} ({strategy.value})")

        self._schedule_enhancement(resume.model_copy(update={"extracted_data": completed}))

        return ExtractionSnapshot(
            resume_id=key,
            status=ExtractionStatus.COMPLETED,
            profile=completed,
            extracted_at=completed.extracted_at,
        )

    def _run_claimed(self, key: str, strategy: ParserStrategy) -> ExtractionSnapshot:
        try:
            return self.run_extraction(key, strategy)
        finally:
            self._release(key)

    def _release(self, key: str) -> None:
        with self._lock:
            self._in_flight.discard(key)

    def _extract_raw_text(self, resume: Resume) -> str:
        content = self._file_loader(resume)
        try:
            text = self._text_extractor(content, resume.file.mime_type, resume.file.original_filename)
        except ExtractionError:
            raise
        except Exception as e:
            raise UpstreamServiceError(f"Text extraction failed: {e}", cause=e) from e
        return text or ""

    def _read_upload(self, resume: Resume) -> bytes:
        path = self.settings.upload_dir / resume.file.storage_path
        try:
            return path.read_bytes()
        except OSError as e:
            raise UpstreamServiceError(f"Could not read uploaded file {path.name}: {e}", cause=e) from e

    def _fail(
        self,
        key: str,
        run_id: str,
        strategy: ParserStrategy,
        error_type: str,
        message: str,
        raw_text: Optional[str],
    ) -> ExtractionSnapshot:
        failed = ExtractedProfile(raw_text=raw_text or None).finalize(
            ExtractionStatus.FAILED,
            utc_now(),
            strategy=strategy.value,
            error_type=error_type,
            error_message=message,
        )
        if not self.resume_repository.mark_failed(key, run_id, failed):
            return self._superseded(key, run_id)

        audit_log(
            AuditAction.EXTRACTION_FAILED.value,
            {
                "resume_id": key,
                "run_id": run_id,
                "strategy": strategy.value,
                "error_type": error_type,
                "error_message": message,
            },
        )
        logger.warning(f"Extraction failed for resume {key}: {error_type}: {message}")

        return ExtractionSnapshot(
            resume_id=key,
            status=ExtractionStatus.FAILED,
            error_message=message,
            extracted_at=failed.extracted_at,
        )

    def _superseded(self, key: str, run_id: str) -> ExtractionSnapshot:
        audit_log(
            AuditAction.EXTRACTION_SUPERSEDED.value,
            {"resume_id": key, "run_id": run_id},
        )
        logger.info(f"Run {run_id} for resume {key} was superseded; result discarded")
        return self.get_extraction(key)

    # -------------------------------------------------------------------------
    # Enhancement
    # -------------------------------------------------------------------------

    def _schedule_enhancement(self, resume: Resume) -> None:
        if not self.settings.enhance_profile or resume.user_id is None:
            return
        try:
            self._executor.submit(
                enhance_user_profile, resume, self.user_repository, self._enhancer
            )
        except RuntimeError as e:
            # Executor already shut down
            logger.warning(f"Profile enhancement for resume {resume.id} not scheduled: {e}")


# Singleton instance
_orchestrator: Optional[ExtractionOrchestrator] = None


def get_orchestrator() -> ExtractionOrchestrator:
    """Get the extraction orchestrator singleton instance."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = ExtractionOrchestrator()
    return _orchestrator
