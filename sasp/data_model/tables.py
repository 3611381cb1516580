from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List

import pandas as pd

from .defaults import default_asset_rows, default_debt_rows
from .holdings import Holding, rows_to_assets, rows_to_debts


@dataclass
class ColumnDefinition:
    """Editor column for one field of a holding row."""

    field: str
    label: str
    kind: str = "text"  # text | number
    default: Any = ""
    min_value: float | None = None
    step: float | None = None
    format: str | None = None
    help: str | None = None


class HoldingTableModel:
    """Editable table of assets or debts: columns, seed rows and row parsing."""

    def __init__(
        self,
        name: str,
        rate_label: str,
        amount_help: str,
        rate_help: str,
        default_rows: List[dict[str, Any]],
        parse_rows: Callable[[List[dict]], List[Holding]],
    ) -> None:
        self.name = name
        self.columns = [
            ColumnDefinition("id", "Id", help="Unique within the table"),
            ColumnDefinition("name", "Name"),
            ColumnDefinition(
                "amount",
                "Amount",
                kind="number",
                default=0.0,
                min_value=0.0,
                step=1000.0,
                format="%.2f",
                help=amount_help,
            ),
            ColumnDefinition("rate", rate_label, kind="number", default=0.0, step=0.5, help=rate_help),
        ]
        self.default_rows = default_rows
        self._parse_rows = parse_rows

    def field_names(self) -> List[str]:
        return [col.field for col in self.columns]

    def create_default_df(self) -> pd.DataFrame:
        return pd.DataFrame(self.default_rows, columns=self.field_names())

    def to_holdings(self, df: pd.DataFrame) -> List[Holding]:
        return self._parse_rows(df.to_dict("records"))


class AssetTableModel(HoldingTableModel):
    def __init__(self) -> None:
        super().__init__(
            "assets",
            "Annual Yield (%)",
            "Current balance",
            "Expected yearly return, may be negative",
            default_asset_rows(),
            rows_to_assets,
        )


class DebtTableModel(HoldingTableModel):
    def __init__(self) -> None:
        super().__init__(
            "debts",
            "Annual Interest (%)",
            "Outstanding principal",
            "Rates above 10% count as high interest",
            default_debt_rows(),
            rows_to_debts,
        )
