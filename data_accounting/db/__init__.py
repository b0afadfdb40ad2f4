from .repositories import DBMerkleTreeStore, DBPageVerificationRepository, DBSettingsRepository
from .session import engine, create_session, database_url
