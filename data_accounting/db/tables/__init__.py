from data_accounting.db.tables.settings import SettingRow
from data_accounting.db.tables.verification import PageVerificationRow
from data_accounting.db.tables.witness import WitnessEventRow, WitnessMerkleNodeRow

__all__ = [
    "PageVerificationRow",
    "SettingRow",
    "WitnessEventRow", "WitnessMerkleNodeRow",
]
