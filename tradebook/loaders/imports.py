"""
Import entry points used by the presentation layer.

Wraps the loaders so that failures come back as a human-readable reason
instead of an exception.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from tradebook.core.errors import EmptyResultError, InvalidFileStructureError
from .base import BaseLoader, ParseResult
from .brokerage_json import BrokerageTransactionsLoader
from .realized_gains import RealizedGainsLoader


logger = logging.getLogger(__name__)


@dataclass
class ImportOutcome:
    """Result of importing one export file."""

    success: bool
    result: Optional[ParseResult] = None
    error: Optional[str] = None

    @property
    def records(self) -> list:
        return self.result.records if self.result else []


def run_import(loader: BaseLoader, payload) -> ImportOutcome:
    """
    Parse a payload with a loader and report the outcome.

    Distinguishes an unreadable file ("Invalid file format") from a readable
    file with no usable rows ("No usable rows"). Dropped rows alongside
    usable ones still count as success.
    """
    try:
        result = loader.parse(payload)
        result.require_records()
    except InvalidFileStructureError as e:
        logger.error(f"Import of {loader.export_name} failed: {e}")
        return ImportOutcome(success=False, error=f"Invalid file format: {e}")
    except EmptyResultError as e:
        logger.warning(f"Import of {loader.export_name} produced no records: {e}")
        return ImportOutcome(success=False, result=result, error=f"No usable rows: {e}")

    return ImportOutcome(success=True, result=result)


def import_realized_gains(text: str, loader: Optional[RealizedGainsLoader] = None) -> ImportOutcome:
    """Import a realized gains CSV export."""
    return run_import(loader or RealizedGainsLoader(), text)


def import_brokerage_transactions(payload) -> ImportOutcome:
    """Import a brokerage transactions JSON export."""
    return run_import(BrokerageTransactionsLoader(), payload)
