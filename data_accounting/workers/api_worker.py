import logging
from contextlib import contextmanager
from dataclasses import asdict
from typing import Annotated, Any, Callable, Generator, Iterator

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Query, status
from pydantic import BaseModel
from sqlmodel import Session

from data_accounting.config import ConfigStore, RuntimeSettings
from data_accounting.db import (
    DBMerkleTreeStore,
    DBPageVerificationRepository,
    DBSettingsRepository,
    create_session,
)
from data_accounting.gateway import Gateway
from data_accounting.merkle.service import MerkleProofService
from data_accounting.middleware.auth import configure_auth
from data_accounting.results import ErrorKind, Failure, Status
from data_accounting.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

VALID_ACTIONS = ("request_merkle_proof", "request_hash")

_STATUS_BY_KIND = {
    ErrorKind.MISSING_PARAMETER: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_PARAMETER: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNKNOWN_CONFIG_KEY: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNREADABLE_CONTENT: 422,
    ErrorKind.DATABASE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class SettingUpdate(BaseModel):
    value: Any


def _http_error(failure: Failure) -> HTTPException:
    return HTTPException(
        status_code=_STATUS_BY_KIND.get(failure.kind, status.HTTP_400_BAD_REQUEST),
        detail={"error": str(failure.kind), "message": failure.message},
    )


def _status_error(result: Status) -> HTTPException:
    return _http_error(result.errors[0])


def create_app(
    session_factory: Callable[[], Session] = create_session,
    config_store: ConfigStore | None = None,
) -> FastAPI:
    app = FastAPI(title="Data Accounting Verification API")
    configure_auth(app)

    @contextmanager
    def settings_repository_scope() -> Iterator[DBSettingsRepository]:
        with session_factory() as session:
            yield DBSettingsRepository(session)

    store = config_store or ConfigStore(settings_repository_scope)
    app.state.config_store = store

    def get_db_session() -> Generator[Session, None, None]:
        with session_factory() as session:
            yield session

    def get_tree_store(
        session_db: Annotated[Session, Depends(get_db_session)]
    ) -> DBMerkleTreeStore:
        return DBMerkleTreeStore(session_db)

    def get_gateway(
        session_db: Annotated[Session, Depends(get_db_session)]
    ) -> Gateway:
        return Gateway(
            proof_service=MerkleProofService(DBMerkleTreeStore(session_db)),
            page_verification_repository=DBPageVerificationRepository(session_db),
        )

    def get_config_store() -> ConfigStore:
        return store

    @app.get("/healthz")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/data_accounting/v1/standard/{action}")
    def run_action(
        action: str,
        gateway: Annotated[Gateway, Depends(get_gateway)],
        var1: Annotated[str | None, Query()] = None,
        var2: Annotated[str | None, Query()] = None,
        var3: Annotated[str | None, Query()] = None,
    ) -> dict[str, Any]:
        """Proof and hash lookups. var1..var3 keep the positional parameter names of the REST API."""
        if action == "request_merkle_proof":
            result = gateway.request_merkle_proof(var1, var2, var3)
            if isinstance(result, Failure):
                raise _http_error(result)
            return {
                "witness_event_id": var1,
                "page_verification_hash": var2,
                "nodes": [asdict(n) for n in result.value],
            }

        if action == "request_hash":
            result = gateway.request_stored_hash(var1)
            if isinstance(result, Failure):
                raise _http_error(result)
            return {
                "rev_id": var1,
                "hashes": [asdict(r) for r in result.value],
                "statement": Gateway.signable_statement(result.value),
            }

        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "invalid_action", "message": f"Valid actions: {', '.join(VALID_ACTIONS)}"},
        )

    @app.get("/data_accounting/v1/witness/{witness_event_id}")
    def get_witness_event(
        witness_event_id: str,
        tree_store: Annotated[DBMerkleTreeStore, Depends(get_tree_store)],
    ) -> dict[str, Any]:
        event = tree_store.get_event(witness_event_id)
        if event is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={"error": str(ErrorKind.NOT_FOUND), "message": "Witness event not found"},
            )
        return {**asdict(event), "max_depth": tree_store.max_depth(witness_event_id)}

    @app.get("/data_accounting/v1/config")
    def get_config(
        config_store: Annotated[ConfigStore, Depends(get_config_store)],
    ) -> dict[str, Any]:
        return config_store.get_config().as_dict()

    @app.put("/data_accounting/v1/config/{name}")
    def set_config(
        name: str,
        update: SettingUpdate,
        config_store: Annotated[ConfigStore, Depends(get_config_store)],
    ) -> dict[str, Any]:
        result = config_store.set(name, update.value)
        if not result.is_ok():
            raise _status_error(result)
        return {"name": name, "value": config_store.get(name)}

    return app


if __name__ == "__main__":
    settings = RuntimeSettings.from_env()
    setup_logging(settings.log_level)
    logger.info("data accounting api worker bootstrap")
    uvicorn.run(create_app(), host=settings.api_host, port=settings.api_port)
