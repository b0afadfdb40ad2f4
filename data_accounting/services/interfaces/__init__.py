from data_accounting.services.interfaces.merkle_tree_store import MerkleTreeStore
from data_accounting.services.interfaces.page_verification_repository import PageVerificationRepository
from data_accounting.services.interfaces.settings_repository import SettingsRepository

__all__ = ["MerkleTreeStore", "PageVerificationRepository", "SettingsRepository"]
