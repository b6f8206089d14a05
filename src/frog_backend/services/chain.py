"""Verification of tip transactions against the Stacks chain API.

The verifier fetches a transaction from a block-explorer style endpoint
(``/extended/v1/tx/{txid}``) and checks it against the tip the client claims
to have sent. The checks themselves live in ``check_tip_transaction`` so they
can be exercised without network I/O.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from frog_backend.core.settings import settings
from frog_backend.services.clarity import decode_uint_arg
from frog_backend.services.errors import VerificationUnavailable

logger = logging.getLogger(__name__)

TX_STATUS_SUCCESS = "success"
TX_TYPE_CONTRACT_CALL = "contract_call"


@dataclass(frozen=True)
class ChainConfig:
    """Immutable configuration for chain verification."""

    base_url: str
    tips_contract_id: str
    tips_function_name: str
    timeout_seconds: float


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of checking a fetched transaction against a tip claim."""

    success: bool
    reason: str | None = None
    block_height: int | None = None
    txid: str | None = None


def load_chain_config() -> ChainConfig:
    """Build configuration object from global settings."""

    return ChainConfig(
        base_url=settings.stacks_api_base_url.rstrip("/"),
        tips_contract_id=settings.tips_contract_id,
        tips_function_name=settings.tips_function_name,
        timeout_seconds=float(settings.chain_http_timeout_seconds),
    )


def _canonical_txid(raw: Any, fallback: str) -> str:
    if not isinstance(raw, str) or not raw.strip():
        return fallback
    value = raw.strip().lower()
    return value[2:] if value.startswith("0x") else value


def _block_height(raw: Any) -> int | None:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def _describe(value: int | None) -> str:
    return "none" if value is None else str(value)


def check_tip_transaction(
    tx: Mapping[str, Any],
    *,
    txid: str,
    post_id: int,
    amount_micro_stx: int,
    contract_id: str,
    function_name: str,
) -> VerificationResult:
    """Check a transaction record against the expected tip.

    Checks run in a fixed order (status, type, contract, function, arguments,
    then the record's own ``tx_id``) so the first failing one determines the
    reported reason. ``txid`` must already be normalized.
    """
    if tx.get("tx_status") != TX_STATUS_SUCCESS:
        return VerificationResult(False, "tx not successful")
    if tx.get("tx_type") != TX_TYPE_CONTRACT_CALL:
        return VerificationResult(False, "wrong tx type")

    call = tx.get("contract_call")
    if not isinstance(call, Mapping):
        call = {}
    if call.get("contract_id") != contract_id:
        return VerificationResult(False, "contract mismatch")
    if call.get("function_name") != function_name:
        return VerificationResult(False, "function mismatch")

    args = call.get("function_args")
    actual_post_id = decode_uint_arg(args, 0)
    if actual_post_id != post_id:
        return VerificationResult(
            False,
            f"postId mismatch (expected {post_id}, got {_describe(actual_post_id)})",
        )
    actual_amount = decode_uint_arg(args, 1)
    if actual_amount != amount_micro_stx:
        return VerificationResult(
            False,
            f"amount mismatch (expected {amount_micro_stx}, got {_describe(actual_amount)})",
        )

    canonical_txid = _canonical_txid(tx.get("tx_id"), txid)
    if canonical_txid != txid:
        return VerificationResult(False, "txid mismatch")

    return VerificationResult(
        True,
        block_height=_block_height(tx.get("block_height")),
        txid=canonical_txid,
    )


class ChainVerifier:
    """HTTP client wrapper for fetching and verifying tip transactions."""

    def __init__(
        self,
        config: ChainConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or load_chain_config()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.config.base_url,
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    transport=self._transport,
                    headers={"Accept": "application/json"},
                )
        return self._client

    async def fetch_transaction(self, txid: str) -> Mapping[str, Any]:
        """Fetch a transaction record by id.

        Raises:
            VerificationUnavailable: On network errors, timeouts, non-2xx
                responses or bodies that are not a JSON object.
        """
        client = await self._ensure_client()
        try:
            response = await client.get(f"/extended/v1/tx/{txid}")
        except httpx.HTTPError as exc:
            logger.warning("Chain API request for tx %s failed: %s", txid, exc)
            raise VerificationUnavailable("chain api request failed") from exc

        if not response.is_success:
            logger.warning("Chain API answered %s for tx %s", response.status_code, txid)
            raise VerificationUnavailable(f"chain api responded with {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise VerificationUnavailable("chain api returned invalid json") from exc
        if not isinstance(payload, Mapping):
            raise VerificationUnavailable("chain api returned invalid json")
        return payload

    async def verify_tip(
        self,
        txid: str,
        *,
        post_id: int,
        amount_micro_stx: int,
    ) -> VerificationResult:
        """Fetch ``txid`` and check it against the expected post id and amount."""
        tx = await self.fetch_transaction(txid)
        result = check_tip_transaction(
            tx,
            txid=txid,
            post_id=post_id,
            amount_micro_stx=amount_micro_stx,
            contract_id=self.config.tips_contract_id,
            function_name=self.config.tips_function_name,
        )
        if not result.success:
            logger.info("Tip tx %s rejected: %s", txid, result.reason)
        return result

    async def close(self) -> None:
        """Clean up underlying HTTP client resources."""

        async with self._client_lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None


class _ChainVerifierSingleton:
    """Singleton wrapper for ChainVerifier."""

    _instance: ChainVerifier | None = None

    @classmethod
    def get_instance(cls) -> ChainVerifier:
        if cls._instance is None:
            cls._instance = ChainVerifier()
        return cls._instance


def get_chain_verifier() -> ChainVerifier:
    """Return a singleton chain verifier instance."""
    return _ChainVerifierSingleton.get_instance()
