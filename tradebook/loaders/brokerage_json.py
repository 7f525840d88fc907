"""
Brokerage transactions JSON export loader.
"""
import json
import logging
from typing import Any

from tradebook.core.errors import InvalidDateError, InvalidFileStructureError, MalformedRowError
from tradebook.core.models import NormalizedTransaction, RawTransaction, TransactionFile
from tradebook.utils.helpers import normalize_date, parse_money, parse_optional_number
from .base import BaseLoader, ParseResult


logger = logging.getLogger(__name__)

TRANSACTIONS_KEY = "BrokerageTransactions"


class BrokerageTransactionsLoader(BaseLoader):
    """
    Loader for brokerage transactions JSON exports.

    The top-level shape is validated before any row is touched; a missing or
    non-array BrokerageTransactions field fails the whole import.
    """

    export_name = "brokerage transactions JSON"

    def parse(self, payload: str | bytes | dict) -> ParseResult:
        """Parse a JSON export (text or already-decoded object)."""
        data = self._decode(payload)
        rows = data[TRANSACTIONS_KEY]

        metadata = TransactionFile(
            from_date=str(data.get("FromDate") or ""),
            to_date=str(data.get("ToDate") or ""),
            total_transactions_amount=parse_money(data.get("TotalTransactionsAmount")),
            total_fees_and_comm_amount=parse_money(data.get("TotalFeesAndCommAmount")),
        )

        return self._parse_rows(enumerate(rows), metadata=metadata)

    def _decode(self, payload: str | bytes | dict) -> dict:
        """Decode and structurally validate the export."""
        if isinstance(payload, (str, bytes, bytearray)):
            try:
                data = json.loads(payload)
            except ValueError as e:
                raise InvalidFileStructureError(f"Invalid JSON: {e}") from e
        else:
            data = payload

        if not isinstance(data, dict):
            raise InvalidFileStructureError(
                f"Expected a JSON object at the top level, got {type(data).__name__}"
            )
        if TRANSACTIONS_KEY not in data:
            raise InvalidFileStructureError(f"Missing required '{TRANSACTIONS_KEY}' array")
        if not isinstance(data[TRANSACTIONS_KEY], list):
            raise InvalidFileStructureError(f"'{TRANSACTIONS_KEY}' must be an array")

        return data

    def _parse_row(self, row: Any, row_number: int) -> NormalizedTransaction:
        """Normalize one element of the BrokerageTransactions array."""
        if not isinstance(row, dict):
            raise MalformedRowError(row_number, f"expected an object, got {type(row).__name__}")

        raw = RawTransaction.from_dict(row)

        # "03/14/2024 as of 03/13/2024" -> "03/14/2024"
        date_token = raw.date.strip().split(" ")[0] if raw.date.strip() else ""
        try:
            tx_date = normalize_date(date_token)
        except InvalidDateError as e:
            raise MalformedRowError(row_number, str(e)) from e

        return NormalizedTransaction(
            id=f"txn-{row_number}-{raw.date}-{raw.symbol or 'none'}",
            date=tx_date,
            action=raw.action.strip(),
            symbol=raw.symbol.strip().upper(),
            description=raw.description.strip(),
            quantity=parse_optional_number(raw.quantity),
            price=parse_optional_number(raw.price),
            fees=parse_money(raw.fees),
            amount=parse_money(raw.amount),
            acctg_rule_cd=raw.acctg_rule_cd,
        )
