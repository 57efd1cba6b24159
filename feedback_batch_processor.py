"""
Feedback Batch Processor for labelling survey exports.
Handles CSV files with per-file error capture, filtering, summaries and export.
"""

import io
import logging
import traceback
from collections import defaultdict
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

import pandas as pd

from feedback_engine.categorisation.engine import FeedbackClassifier
from feedback_engine.categorisation.preprocess import coerce_comment
from feedback_engine.config.classifier_config import CLASSIFIER_CONFIG
from feedback_engine.scoring.nps import calculate_nps, nps_category

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

COLUMNS = CLASSIFIER_CONFIG["columns"]
LABEL_COLUMNS = ["Category", "Area", "UserType", "CommentType"]
EXPLAIN_COLUMN = "CategoryExplain"
NPS_CATEGORY_COLUMN = "NPSCategory"
ALL = "All"


class InvalidCsvStructureError(Exception):
    """Raised when a CSV file does not have the columns needed for classification."""
    pass


@dataclass
class ProcessingError:
    """Details of a processing error."""
    file_name: str
    error_type: str
    error_message: str
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


@dataclass
class BatchStats:
    """Statistics for batch processing."""
    total_files: int = 0
    processed: int = 0
    successful: int = 0
    failed: int = 0

    # Record counts
    total_records: int = 0
    commented_records: int = 0

    # Timing
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def processing_time(self) -> float:
        """Calculate total processing time in seconds."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return 0.0

    @property
    def success_rate(self) -> float:
        """Calculate success rate as percentage."""
        if self.total_files == 0:
            return 0.0
        return (self.successful / self.total_files) * 100

    @property
    def comment_rate(self) -> float:
        """Share of records carrying a non-blank comment, as percentage."""
        if self.total_records == 0:
            return 0.0
        return (self.commented_records / self.total_records) * 100


@dataclass
class BatchResult:
    """Complete result of batch processing."""
    stats: BatchStats
    records: List[Dict[str, Any]]
    errors: List[ProcessingError]
    error_summary: Dict[str, int] = field(default_factory=dict)

    def to_dataframe(self) -> pd.DataFrame:
        """Labelled records as a DataFrame (empty frame if nothing was processed)."""
        if not self.records:
            return pd.DataFrame(columns=LABEL_COLUMNS + [EXPLAIN_COLUMN])
        return pd.DataFrame(self.records)

    @staticmethod
    def merge_results(result1: 'BatchResult', result2: 'BatchResult') -> 'BatchResult':
        """
        Merge two BatchResult objects into a single combined result.

        This is used for cumulative batch processing where results from
        multiple uploads need to be combined.

        Args:
            result1: First batch result (typically the existing cumulative result)
            result2: Second batch result (typically the new batch to add)

        Returns:
            New BatchResult with merged data
        """
        merged_stats = BatchStats()

        # Sum all count fields
        merged_stats.total_files = result1.stats.total_files + result2.stats.total_files
        merged_stats.processed = result1.stats.processed + result2.stats.processed
        merged_stats.successful = result1.stats.successful + result2.stats.successful
        merged_stats.failed = result1.stats.failed + result2.stats.failed
        merged_stats.total_records = result1.stats.total_records + result2.stats.total_records
        merged_stats.commented_records = result1.stats.commented_records + result2.stats.commented_records

        # Use earliest start time and latest end time
        if result1.stats.start_time and result2.stats.start_time:
            merged_stats.start_time = min(result1.stats.start_time, result2.stats.start_time)
        else:
            merged_stats.start_time = result1.stats.start_time or result2.stats.start_time

        if result1.stats.end_time and result2.stats.end_time:
            merged_stats.end_time = max(result1.stats.end_time, result2.stats.end_time)
        else:
            merged_stats.end_time = result1.stats.end_time or result2.stats.end_time

        merged_error_summary = dict(result1.error_summary)
        for error_type, count in result2.error_summary.items():
            merged_error_summary[error_type] = merged_error_summary.get(error_type, 0) + count

        return BatchResult(
            stats=merged_stats,
            records=result1.records + result2.records,
            errors=result1.errors + result2.errors,
            error_summary=merged_error_summary
        )


class FeedbackBatchProcessor:
    """Batch processor for survey CSV exports."""

    def __init__(self, comment_column: Optional[str] = None, debug_mode: bool = False):
        """
        Initialize the batch processor.

        Args:
            comment_column: CSV column holding the free-text comment
            debug_mode: Pass-through to the classifier for rationale logging
        """
        self.comment_column = comment_column or COLUMNS["comment"]
        self.classifier = FeedbackClassifier(debug_mode=debug_mode)

        logger.info(f"Initialized batch processor: comment_column={self.comment_column!r}")

    def process_batch(
        self,
        files: List[Tuple[str, bytes]],
        progress_callback: Optional[Callable[[int, int, str], None]] = None,
        start_id: int = 1
    ) -> BatchResult:
        """
        Process a batch of CSV files.

        Record IDs run on across files, starting at start_id.

        Args:
            files: List of (filename, content) tuples
            progress_callback: Optional callback(current, total, message)
            start_id: First record ID to assign

        Returns:
            BatchResult with all labelled records and errors
        """
        stats = BatchStats(
            total_files=len(files),
            start_time=datetime.now()
        )

        records: List[Dict[str, Any]] = []
        errors: List[ProcessingError] = []
        error_types: Dict[str, int] = {}
        next_id = start_id

        logger.info(f"Starting batch processing of {len(files)} files")

        for idx, (filename, content) in enumerate(files):
            error_type = None
            error_message = ""
            try:
                if progress_callback:
                    progress_callback(idx + 1, len(files), f"Processing: {filename}")

                logger.debug(f"Processing file {idx + 1}/{len(files)}: {filename}")

                file_records = self._process_single_file(filename, content, next_id)

                records.extend(file_records)
                next_id += len(file_records)
                stats.successful += 1
                stats.total_records += len(file_records)
                stats.commented_records += sum(
                    1 for record in file_records if coerce_comment(record.get(self.comment_column)).strip()
                )

            except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
                error_type = "CSV_PARSE_ERROR"
                error_message = f"Invalid CSV: {str(e)}"
                logger.error(f"CSV parse error in {filename}: {e}")

            except InvalidCsvStructureError as e:
                error_type = "MISSING_COLUMN"
                error_message = str(e)
                logger.error(f"Invalid CSV structure in {filename}: {e}")

            except Exception as e:
                error_type = "PROCESSING_ERROR"
                error_message = f"{type(e).__name__}: {str(e)}"
                logger.error(f"Processing error in {filename}: {traceback.format_exc()}")

            stats.processed += 1
            if error_type:
                errors.append(ProcessingError(
                    file_name=filename,
                    error_type=error_type,
                    error_message=error_message
                ))
                stats.failed += 1
                error_types[error_type] = error_types.get(error_type, 0) + 1

        stats.end_time = datetime.now()

        logger.info(
            f"Batch processing complete: {stats.successful}/{stats.total_files} files, "
            f"{stats.total_records} records, time: {stats.processing_time:.1f}s"
        )

        return BatchResult(
            stats=stats,
            records=records,
            errors=errors,
            error_summary=error_types
        )

    def _read_csv(self, content: bytes) -> pd.DataFrame:
        """Parse CSV bytes, keeping the comment column as text and blanks as None."""
        df = pd.read_csv(
            io.BytesIO(content),
            dtype={self.comment_column: str},
            skip_blank_lines=True,
            encoding="utf-8"
        )
        return df.astype(object).where(pd.notna(df), None)

    def _process_single_file(self, filename: str, content: bytes, start_id: int) -> List[Dict[str, Any]]:
        """
        Label every row of one CSV file.

        Args:
            filename: Filename for logging purposes
            content: Raw CSV bytes
            start_id: ID of the first row

        Returns:
            List of labelled records
        """
        df = self._read_csv(content)

        if self.comment_column not in df.columns:
            raise InvalidCsvStructureError(
                f"Missing comment column '{self.comment_column}'. "
                f"Found columns: {', '.join(str(c) for c in df.columns)}"
            )

        has_nps = COLUMNS["nps"] in df.columns
        file_records = []

        for offset, row in enumerate(df.to_dict(orient="records")):
            result = self.classifier.classify_comment(coerce_comment(row.get(self.comment_column)))

            record = dict(row)
            record["ID"] = start_id + offset
            record.update(result.to_dict())
            if has_nps:
                bucket = nps_category(row.get(COLUMNS["nps"]))
                record[NPS_CATEGORY_COLUMN] = bucket.value if bucket else ""
            file_records.append(record)

        logger.debug(f"Labelled {len(file_records)} records from {filename}")
        return file_records


def filter_records(
    df: pd.DataFrame,
    feedback_type: str = ALL,
    version: Any = ALL,
    category: str = ALL,
    area: str = ALL,
    user_type: str = ALL,
    comment_type: str = ALL
) -> pd.DataFrame:
    """
    Filter labelled records. "All" disables a filter.

    Args:
        df: Labelled records
        feedback_type: Promoter / Passive / Detractor
        version: Survey product version
        category, area, user_type, comment_type: Label values

    Returns:
        Filtered copy of the DataFrame
    """
    mask = pd.Series(True, index=df.index)

    if feedback_type != ALL:
        if NPS_CATEGORY_COLUMN in df.columns:
            buckets = df[NPS_CATEGORY_COLUMN]
        elif COLUMNS["nps"] in df.columns:
            buckets = df[COLUMNS["nps"]].map(lambda v: getattr(nps_category(v), "value", ""))
        else:
            buckets = pd.Series("", index=df.index)
        mask &= buckets == feedback_type

    if version != ALL and COLUMNS["version"] in df.columns:
        mask &= df[COLUMNS["version"]] == version

    for column, value in (
        ("Category", category),
        ("Area", area),
        ("UserType", user_type),
        ("CommentType", comment_type),
    ):
        if value != ALL:
            mask &= df[column] == value

    return df[mask].copy()


def available_filter_values(df: pd.DataFrame, column: str) -> List[Any]:
    """Return "All" followed by the distinct non-empty values of a column."""
    if column not in df.columns:
        return [ALL]
    values = [v for v in df[column].dropna().unique() if v != ""]
    return [ALL] + sorted(values, key=str)


def generate_summary(records: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Generate aggregate summary statistics from labelled records.

    Args:
        records: List of labelled records

    Returns:
        Dictionary with summary statistics
    """
    total = len(records)
    summary = {
        'total_records': total,
        'nps': asdict(calculate_nps(record.get(COLUMNS["nps"]) for record in records)),
        'by_category': defaultdict(int),
        'by_area': defaultdict(int),
        'by_user_type': defaultdict(int),
        'by_comment_type': defaultdict(int),
        'category_breakdown': [],
    }

    for record in records:
        summary['by_category'][record.get('Category')] += 1
        summary['by_area'][record.get('Area')] += 1
        summary['by_user_type'][record.get('UserType')] += 1
        summary['by_comment_type'][record.get('CommentType')] += 1

    # Category cards, in first-seen order
    for category, count in summary['by_category'].items():
        summary['category_breakdown'].append({
            'category': category,
            'count': count,
            'percentage': round(count / total * 100, 1) if total else 0.0,
        })

    # Convert defaultdicts to regular dicts for JSON serialization
    for key in ('by_category', 'by_area', 'by_user_type', 'by_comment_type'):
        summary[key] = dict(summary[key])

    return summary


def export_csv(df: pd.DataFrame) -> bytes:
    """Serialize labelled records to CSV bytes, without the explanation trace."""
    return df.drop(columns=[EXPLAIN_COLUMN], errors="ignore").to_csv(index=False).encode("utf-8")


def errors_to_dataframe(errors: List[ProcessingError]) -> pd.DataFrame:
    """
    Convert processing errors to a pandas DataFrame.

    Args:
        errors: List of ProcessingError objects

    Returns:
        pandas DataFrame
    """
    rows = []
    for error in errors:
        rows.append({
            "File Name": error.file_name,
            "Error Type": error.error_type,
            "Error Message": error.error_message,
            "Timestamp": error.timestamp,
        })

    return pd.DataFrame(rows, columns=["File Name", "Error Type", "Error Message", "Timestamp"])
