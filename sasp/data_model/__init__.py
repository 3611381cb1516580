from .defaults import default_asset_rows, default_debt_rows, default_financials
from .financials import FinancialState, financials_from_payload
from .holdings import (
    Asset,
    Debt,
    rows_to_assets,
    rows_to_debts,
)
from .profile import Profile, parse_safety_line, profile_from_payload
from .tables import AssetTableModel, ColumnDefinition, DebtTableModel, HoldingTableModel

__all__ = [
    "Asset",
    "AssetTableModel",
    "ColumnDefinition",
    "Debt",
    "DebtTableModel",
    "FinancialState",
    "HoldingTableModel",
    "Profile",
    "default_asset_rows",
    "default_debt_rows",
    "default_financials",
    "financials_from_payload",
    "parse_safety_line",
    "profile_from_payload",
    "rows_to_assets",
    "rows_to_debts",
]
