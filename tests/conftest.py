# tests/conftest.py
from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Iterator
from typing import Any

os.environ.setdefault("PYTEST_RUNNING", "true")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOADS_DIR", tempfile.mkdtemp(prefix="frog-uploads-"))

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from frog_backend.api.v1.dependencies import get_blob_store_dep, get_chain_verifier_dep
from frog_backend.db.session import Base
from frog_backend.db.session import get_db as app_get_session
from frog_backend.main import app as fastapi_app
from frog_backend.models import Post
from frog_backend.services.chain import ChainConfig, ChainVerifier
from frog_backend.services.storage import LocalBlobStore

TIPS_CONTRACT_ID = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM.frog-social-tips-v1"
TIPS_FUNCTION_NAME = "tip-post"
CONTENT_HASH = "a" * 64
TXID = "b" * 64


def uint_hex(value: int) -> str:
    """Serialize a Clarity uint the way the chain API reports it."""
    return "0x01" + value.to_bytes(16, "big").hex()


class FakeChainApi:
    """In-memory stand-in for the ``/extended/v1/tx/{txid}`` endpoint."""

    def __init__(self) -> None:
        self.transactions: dict[str, tuple[int, Any]] = {}
        self.requests: list[str] = []
        self.fail_with: Exception | None = None

    def add(self, txid: str, payload: Any, status_code: int = 200) -> None:
        self.transactions[txid] = (status_code, payload)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request.url.path)
        if self.fail_with is not None:
            raise self.fail_with
        txid = request.url.path.rsplit("/", 1)[-1]
        status_code, payload = self.transactions.get(txid, (404, {"error": "not found"}))
        return httpx.Response(status_code, json=payload)


@pytest.fixture()
def tip_tx() -> Callable[..., dict[str, Any]]:
    """Build a chain API transaction record for a ``tip-post`` call."""

    def _build(
        post_id: int = 1,
        amount: int = 100_000,
        *,
        txid: str = TXID,
        tx_status: str = "success",
        tx_type: str = "contract_call",
        contract_id: str = TIPS_CONTRACT_ID,
        function_name: str = TIPS_FUNCTION_NAME,
        args: list[dict[str, Any]] | None = None,
        block_height: int | None = 12345,
    ) -> dict[str, Any]:
        function_args = args
        if function_args is None:
            function_args = [
                {"repr": f"u{post_id}", "hex": uint_hex(post_id), "name": "post-id", "type": "uint"},
                {"repr": f"u{amount}", "hex": uint_hex(amount), "name": "amount", "type": "uint"},
            ]
        return {
            "tx_id": f"0x{txid}",
            "tx_status": tx_status,
            "tx_type": tx_type,
            "block_height": block_height,
            "contract_call": {
                "contract_id": contract_id,
                "function_name": function_name,
                "function_args": function_args,
            },
        }

    return _build


@pytest.fixture()
def chain_api() -> FakeChainApi:
    return FakeChainApi()


@pytest.fixture()
def chain_verifier(chain_api: FakeChainApi) -> ChainVerifier:
    config = ChainConfig(
        base_url="https://chain.test",
        tips_contract_id=TIPS_CONTRACT_ID,
        tips_function_name=TIPS_FUNCTION_NAME,
        timeout_seconds=1.0,
    )
    return ChainVerifier(config, transport=httpx.MockTransport(chain_api.handler))


@pytest.fixture()
def engine(tmp_path) -> Iterator[Engine]:
    # A file database lets independent sessions race like separate requests.
    engine = create_engine(
        f"sqlite:///{tmp_path / 'frog-test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def blob_store(tmp_path) -> LocalBlobStore:
    store = LocalBlobStore(tmp_path / "uploads")
    store.ensure()
    return store


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    session_factory: sessionmaker[Session],
    chain_verifier: ChainVerifier,
    blob_store: LocalBlobStore,
) -> Iterator[None]:
    def _get_session_override() -> Iterator[Session]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_chain_verifier_dep] = lambda: chain_verifier
    app.dependency_overrides[get_blob_store_dep] = lambda: blob_store
    try:
        yield
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def test_post(db_session: Session) -> Post:
    """Create a post stored under ``CONTENT_HASH`` with no tips."""
    post = Post(
        content_hash=CONTENT_HASH,
        text="Ribbit from the pond",
        links=[],
        images=[],
        total_tip_micro_stx=0,
        tip_count=0,
    )
    db_session.add(post)
    db_session.commit()
    return post
