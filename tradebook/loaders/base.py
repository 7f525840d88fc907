"""
Base loader abstract class and parse result types for export loaders.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from tradebook.core.errors import EmptyResultError, MalformedRowError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowSkipped:
    """A data row that was dropped during parsing, and why."""

    row_number: int
    reason: str

    def __str__(self) -> str:
        return f"row {self.row_number}: {self.reason}"


@dataclass
class ParseResult:
    """
    Outcome of parsing one export.

    Partial success is normal: records holds every usable row and skipped
    explains each dropped one.
    """

    records: list = field(default_factory=list)
    skipped: list[RowSkipped] = field(default_factory=list)
    summary: str = ""
    metadata: Optional[Any] = None

    @property
    def record_count(self) -> int:
        return len(self.records)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def is_empty(self) -> bool:
        """True when the export parsed but produced no usable records."""
        return not self.records

    def require_records(self) -> list:
        """
        Return the records, refusing an empty result.

        Raises:
            EmptyResultError: If no usable records were produced.
        """
        if self.is_empty:
            detail = f" ({self.skipped_count} rows skipped)" if self.skipped else ""
            raise EmptyResultError(f"No usable records found{detail}")
        return self.records


class BaseLoader(ABC):
    """Abstract base class for brokerage export loaders."""

    export_name: str = "export"

    @abstractmethod
    def parse(self, payload: Any) -> ParseResult:
        """
        Parse an in-memory export payload.

        Args:
            payload: The raw export content. Reading it from disk or a
                request body is the caller's job.

        Returns:
            ParseResult with normalized records and skipped rows.

        Raises:
            InvalidFileStructureError: If the payload does not have the
                expected overall shape.
        """
        pass

    @abstractmethod
    def _parse_row(self, row: Any, row_number: int) -> Any:
        """
        Parse a single row.

        Args:
            row: One raw row of the export.
            row_number: Position of the row, for reporting.

        Returns:
            The normalized record.

        Raises:
            MalformedRowError: If the row is unusable. The row is skipped.
        """
        pass

    def _parse_rows(
        self, numbered_rows: Iterable[tuple[int, Any]], summary: str = "", metadata: Any = None
    ) -> ParseResult:
        """Parse each (row_number, row) pair, collecting records and skipped rows."""
        result = ParseResult(summary=summary, metadata=metadata)
        for row_number, row in numbered_rows:
            try:
                result.records.append(self._parse_row(row, row_number))
            except MalformedRowError as e:
                skipped = RowSkipped(e.row_number, e.reason)
                logger.warning(f"Skipping {self.export_name} {skipped}")
                result.skipped.append(skipped)

        logger.info(
            f"Parsed {result.record_count} records from {self.export_name} "
            f"({result.skipped_count} skipped)"
        )
        return result
