from __future__ import annotations

from sqlalchemy import func, inspect, or_, update
from sqlmodel import Session, select

from data_accounting.db.tables import (
    PageVerificationRow,
    SettingRow,
    WitnessEventRow,
    WitnessMerkleNodeRow,
)
from data_accounting.entities.verification import MerkleNode, VerificationHash, WitnessEvent
from data_accounting.services.interfaces import (
    MerkleTreeStore,
    PageVerificationRepository,
    SettingsRepository,
)


class DBMerkleTreeStore(MerkleTreeStore):
    def __init__(self, session: Session):
        self._session = session

    def get_event(self, witness_event_id: str) -> WitnessEvent | None:
        row = self._session.get(WitnessEventRow, witness_event_id)
        return self._event_row_to_domain(row) if row else None

    def get_nodes(
        self, witness_event_id: str, leaf_digest: str, depth: int | None = None,
    ) -> list[MerkleNode]:
        stmt = select(WitnessMerkleNodeRow).where(
            WitnessMerkleNodeRow.witness_event_id == witness_event_id,
            or_(
                WitnessMerkleNodeRow.left_leaf == leaf_digest,
                WitnessMerkleNodeRow.right_leaf == leaf_digest,
            ),
        ).order_by(WitnessMerkleNodeRow.depth.asc(), WitnessMerkleNodeRow.id.asc())
        if depth is not None:
            stmt = stmt.where(WitnessMerkleNodeRow.depth == depth).limit(1)
        rows = self._session.exec(stmt).all()
        return [self._node_row_to_domain(row) for row in rows]

    def max_depth(self, witness_event_id: str) -> int | None:
        return self._session.exec(
            select(func.max(WitnessMerkleNodeRow.depth)).where(
                WitnessMerkleNodeRow.witness_event_id == witness_event_id,
            )
        ).first()

    def add_event(self, event: WitnessEvent, nodes: list[MerkleNode]) -> None:
        if self._session.get(WitnessEventRow, event.witness_event_id) is not None:
            raise ValueError(f"Witness event '{event.witness_event_id}' already exists")

        self._session.add(WitnessEventRow(
            id=event.witness_event_id,
            recorded_root=event.recorded_root,
            domain_id=event.domain_id,
            witness_network=event.witness_network,
            smart_contract_address=event.smart_contract_address,
            transaction_hash=event.transaction_hash,
            sender_account_address=event.sender_account_address,
            meta_json=dict(event.meta),
            created_at=event.created_at,
        ))
        # Parent row first so the node FK holds on engines that enforce it.
        self._session.flush()
        for node in nodes:
            self._session.add(WitnessMerkleNodeRow(
                witness_event_id=node.witness_event_id,
                depth=node.depth,
                left_leaf=node.left_leaf,
                right_leaf=node.right_leaf,
                successor=node.successor,
            ))
        self._session.commit()

    @staticmethod
    def _event_row_to_domain(row: WitnessEventRow) -> WitnessEvent:
        return WitnessEvent(
            witness_event_id=row.id,
            recorded_root=row.recorded_root,
            created_at=row.created_at,
            domain_id=row.domain_id,
            witness_network=row.witness_network,
            smart_contract_address=row.smart_contract_address,
            transaction_hash=row.transaction_hash,
            sender_account_address=row.sender_account_address,
            meta=row.meta_json or {},
        )

    @staticmethod
    def _node_row_to_domain(row: WitnessMerkleNodeRow) -> MerkleNode:
        return MerkleNode(
            witness_event_id=row.witness_event_id,
            depth=row.depth,
            left_leaf=row.left_leaf,
            right_leaf=row.right_leaf,
            successor=row.successor,
        )


class DBPageVerificationRepository(PageVerificationRepository):
    def __init__(self, session: Session):
        self._session = session

    def find_by_rev_id(self, rev_id: int) -> list[VerificationHash]:
        rows = self._session.exec(
            select(PageVerificationRow).where(PageVerificationRow.rev_id == rev_id)
        ).all()
        return [
            VerificationHash(rev_id=row.rev_id, verification_hash=row.verification_hash)
            for row in rows
        ]

    def add(self, record: VerificationHash) -> None:
        if self._session.get(PageVerificationRow, record.rev_id) is not None:
            raise ValueError(f"Revision {record.rev_id} already has a verification hash")
        self._session.add(PageVerificationRow(
            rev_id=record.rev_id,
            verification_hash=record.verification_hash,
        ))
        self._session.commit()


class DBSettingsRepository(SettingsRepository):
    def __init__(self, session: Session):
        self._session = session

    def table_exists(self) -> bool:
        return inspect(self._session.get_bind()).has_table(SettingRow.__tablename__)

    def fetch_all(self) -> dict[str, str]:
        rows = self._session.exec(select(SettingRow)).all()
        return {row.das_name: row.das_value for row in rows}

    def exists(self, name: str) -> bool:
        row = self._session.exec(
            select(SettingRow.das_name).where(SettingRow.das_name == name)
        ).first()
        return row is not None

    def update(self, name: str, encoded_value: str) -> int:
        try:
            result = self._session.exec(
                update(SettingRow)
                .where(SettingRow.das_name == name)
                .values(das_value=encoded_value)
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        return result.rowcount

    def insert(self, name: str, encoded_value: str) -> int:
        try:
            self._session.add(SettingRow(das_name=name, das_value=encoded_value))
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        return 1
