"""
Realized gain/loss CSV export loader.
"""
import logging
from io import StringIO

import pandas as pd

from tradebook.core.config import ImportConfig
from tradebook.core.errors import InvalidDateError, InvalidFileStructureError, MalformedRowError
from tradebook.core.models import Term, TradeRecord
from tradebook.utils.helpers import days_between, normalize_date, parse_money, parse_quantity
from .base import BaseLoader, ParseResult


logger = logging.getLogger(__name__)


class RealizedGainsLoader(BaseLoader):
    """
    Loader for realized gain/loss CSV exports.

    Layout: row 0 is a free-text summary, row 1 is the header and every
    following row is a positional 25-column trade record.
    """

    export_name = "realized gains CSV"

    def __init__(self, column_count: int = 25, summary_rows: int = 2):
        """
        Initialise the loader.

        Args:
            column_count: Number of positional columns in a data row.
            summary_rows: Rows before the first data row (summary + header).
        """
        self.column_count = column_count
        self.summary_rows = summary_rows

    @classmethod
    def from_config(cls, config: ImportConfig) -> "RealizedGainsLoader":
        return cls(column_count=config.csv_column_count, summary_rows=config.csv_summary_rows)

    def parse(self, payload: str) -> ParseResult:
        """Parse realized gains CSV text into TradeRecords."""
        df = self._read_rows(payload)

        if len(df) < self.summary_rows:
            raise InvalidFileStructureError(
                f"CSV file must start with a summary row and a header row, found {len(df)} rows"
            )

        summary = str(df.iat[0, 0]).strip()

        # Blank lines are kept by _read_rows, so position + 1 is the file line number.
        data_rows = (
            (position + 1, df.iloc[position])
            for position in range(self.summary_rows, len(df))
            if any(str(cell).strip() for cell in df.iloc[position])
        )
        return self._parse_rows(data_rows, summary=summary)

    def _read_rows(self, payload: str) -> pd.DataFrame:
        """Tokenize the CSV text into a string-only DataFrame."""
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8-sig")

        try:
            df = pd.read_csv(
                StringIO(payload),
                header=None,
                names=list(range(self.column_count)),
                index_col=False,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=False,
                engine="python",
                on_bad_lines=lambda bad_line: bad_line[: self.column_count],
            )
        except pd.errors.EmptyDataError:
            raise InvalidFileStructureError("CSV file is empty")
        except pd.errors.ParserError as e:
            raise InvalidFileStructureError(f"CSV parsing error: {e}") from e

        return df.fillna("")

    def _parse_row(self, row: pd.Series, row_number: int) -> TradeRecord:
        """Parse one positional data row into a TradeRecord."""
        cells = [str(cell).strip() for cell in row.tolist()]
        cells += [""] * (self.column_count - len(cells))

        symbol = cells[0].upper()
        closed_date = cells[2]
        opened_date = cells[3]

        missing = [
            name
            for name, value in (
                ("symbol", symbol),
                ("opened date", opened_date),
                ("closed date", closed_date),
            )
            if not value
        ]
        if missing:
            raise MalformedRowError(row_number, f"missing required fields: {', '.join(missing)}")

        try:
            opened_on = normalize_date(opened_date)
            closed_on = normalize_date(closed_date)
        except InvalidDateError as e:
            raise MalformedRowError(row_number, str(e)) from e

        return TradeRecord(
            symbol=symbol,
            name=cells[1],
            closed_date=closed_date,
            opened_date=opened_date,
            quantity=parse_quantity(cells[4]),
            proceeds_per_share=parse_money(cells[5]),
            cost_per_share=parse_money(cells[6]),
            proceeds=parse_money(cells[7]),
            cost_basis=parse_money(cells[8]),
            gain_loss=parse_money(cells[9]),
            gain_loss_percent=parse_money(cells[10]),
            long_term_gain_loss=parse_money(cells[11]),
            short_term_gain_loss=parse_money(cells[12]),
            term=Term.from_label(cells[13]),
            unadjusted_cost_basis=parse_money(cells[14]),
            wash_sale=cells[15],
            disallowed_loss=parse_money(cells[16]),
            transaction_closed_date=cells[17],
            transaction_cost_basis=parse_money(cells[18]),
            total_transaction_gain_loss=parse_money(cells[19]),
            total_transaction_gain_loss_percent=parse_money(cells[20]),
            lt_transaction_gain_loss=parse_money(cells[21]),
            lt_transaction_gain_loss_percent=parse_money(cells[22]),
            st_transaction_gain_loss=parse_money(cells[23]),
            st_transaction_gain_loss_percent=parse_money(cells[24]),
            days_in_trade=days_between(opened_on, closed_on),
        )
