# src/creeper/batch_processor.py
"""Takes in several image folders and writes one combined report."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from threading import Event
from typing import Callable, List, Optional

from .intake import ImageIntake
from .generators import ExcelReportGenerator
from .models import ImageRecord
from .main import _get_unique_path
from .constants import DEFAULT_PROJECT_NAME
from .exceptions import CreeperError, InputFolderMissingError, NoGPSDataError, ProcessCancelledError

logger = logging.getLogger(__name__)


@dataclass
class BatchJob:
    """One input folder and the records taken in from it."""

    input_path: str
    include_no_gps: bool = False
    status: str = "pending"  # pending, running, completed, failed, cancelled
    error_message: str = ""
    records: List[ImageRecord] = field(default_factory=list)

    @property
    def located_count(self) -> int:
        return sum(1 for r in self.records if r.has_location)


@dataclass
class BatchResult:
    total_jobs: int
    completed: int
    failed: int
    cancelled: int
    total_records: int = 0
    details: List[str] = field(default_factory=list)


class BatchProcessor:
    """Queue of folders, taken in one after another."""

    def __init__(self, max_workers: Optional[int] = None):
        self.queue: List[BatchJob] = []
        self.max_workers = max_workers

    def add_job(self, input_path: str, include_no_gps: bool = False) -> int:
        """Add a folder to the queue. Returns job index."""
        self.queue.append(BatchJob(input_path=str(input_path), include_no_gps=include_no_gps))
        return len(self.queue) - 1

    def remove_job(self, index: int) -> bool:
        """Remove a pending job from the queue."""
        if 0 <= index < len(self.queue) and self.queue[index].status == "pending":
            self.queue.pop(index)
            return True
        return False

    def clear_queue(self) -> None:
        self.queue = [job for job in self.queue if job.status != "pending"]

    def get_pending_count(self) -> int:
        return sum(1 for job in self.queue if job.status == "pending")

    def process_all(
        self, progress_callback: Optional[Callable[[int, int, str], None]] = None, stop_event: Optional[Event] = None
    ) -> BatchResult:
        """
        Take in every pending folder, in queue order.

        A job interrupted by stop_event, and every job after it, ends up
        cancelled. Errors in one folder do not stop the others.

        Args:
            progress_callback: Callback(current_job, total_jobs, message)
            stop_event: Event to signal cancellation

        Returns:
            BatchResult with processing summary
        """
        pending_jobs = [job for job in self.queue if job.status == "pending"]
        result = BatchResult(total_jobs=len(pending_jobs), completed=0, failed=0, cancelled=0)

        for i, job in enumerate(pending_jobs):
            if stop_event and stop_event.is_set():
                job.status = "cancelled"
                result.cancelled += 1
                result.details.append(f"Cancelled: {job.input_path}")
                continue

            job.status = "running"
            if progress_callback:
                progress_callback(i + 1, result.total_jobs, f"Processing: {job.input_path}")

            try:
                job.records = self._run_job(job, stop_event)
                job.status = "completed"
                result.completed += 1
                result.total_records += len(job.records)
                result.details.append(
                    f"{job.input_path}: {len(job.records)} images, {job.located_count} with location"
                )
                logger.info(f"Batch job completed: {job.input_path}")

            except ProcessCancelledError:
                job.status = "cancelled"
                job.records = []
                result.cancelled += 1
                result.details.append(f"Cancelled: {job.input_path}")
                logger.info(f"Batch job cancelled: {job.input_path}")

            except CreeperError as e:
                job.status = "failed"
                job.error_message = str(e)
                result.failed += 1
                result.details.append(f"{job.input_path}: {e}")
                logger.warning(f"Batch job failed: {job.input_path} - {e}")

            except Exception as e:
                job.status = "failed"
                job.error_message = str(e)
                result.failed += 1
                result.details.append(f"{job.input_path}: Error - {e}")
                logger.error(f"Batch job error: {job.input_path} - {e}")

        return result

    def _run_job(self, job: BatchJob, stop_event: Optional[Event]) -> List[ImageRecord]:
        input_dir = Path(job.input_path)
        if not input_dir.exists():
            raise InputFolderMissingError(input_dir)

        intake = ImageIntake(
            input_dir=input_dir,
            include_no_gps=job.include_no_gps,
            stop_event=stop_event,
            max_workers=self.max_workers,
        )
        return intake.process()

    def collect_records(self) -> List[ImageRecord]:
        """Records of every completed job, in queue order."""
        return [record for job in self.queue if job.status == "completed" for record in job.records]

    def write_report(self, output_dir: Path | str, project_name: str = "") -> Path:
        """Write all completed records to a single Excel report.

        Raises:
            NoGPSDataError: If no completed job produced a record.
        """
        records = self.collect_records()
        if not records:
            completed = [job.input_path for job in self.queue if job.status == "completed"]
            raise NoGPSDataError(0, ", ".join(completed))

        excel_gen = ExcelReportGenerator()
        for i, record in enumerate(records):
            excel_gen.add_row(i + 2, i + 1, record)

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        base_name = (project_name.strip() or DEFAULT_PROJECT_NAME).replace(".xlsx", "")
        xlsx_path = _get_unique_path(output_dir / f"{base_name}.xlsx")
        excel_gen.save(xlsx_path)
        logger.info(f"Batch report saved: {xlsx_path} ({len(records)} records)")
        return xlsx_path

    def get_summary(self) -> str:
        pending = sum(1 for j in self.queue if j.status == "pending")
        running = sum(1 for j in self.queue if j.status == "running")
        completed = sum(1 for j in self.queue if j.status == "completed")
        failed = sum(1 for j in self.queue if j.status == "failed")
        cancelled = sum(1 for j in self.queue if j.status == "cancelled")

        return (
            f"Queue: {pending} pending, {running} running, {completed} completed, "
            f"{failed} failed, {cancelled} cancelled"
        )
