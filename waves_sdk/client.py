"""Async client for the Waves node REST API.

:class:`Node` wraps the node endpoints the SDK needs and parses responses
into the read models of :mod:`waves_sdk.models`. All I/O uses :mod:`httpx`
so the client is fully async and compatible with ``asyncio``.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Iterable

import httpx
import structlog

from waves_sdk.account import Address
from waves_sdk.config import LOCAL_URL, MAINNET_URL, STAGENET_URL, TESTNET_URL, WavesSettings
from waves_sdk.data_entry import DataEntry
from waves_sdk.errors import WavesError
from waves_sdk.models import (
    AssetBalance,
    AssetDetails,
    AssetDistribution,
    Balance,
    BalanceDetails,
    Block,
    BlockchainRewards,
    BlockHeaders,
    HistoryBalance,
    LeaseInfo,
    ScriptInfo,
    ScriptMeta,
    Status,
    TransactionInfo,
    TransactionStatus,
    Validation,
)
from waves_sdk.transactions import Amount, Transaction
from waves_sdk.types import Alias, AssetId, ChainId, Id, resolve_chain_id
from waves_sdk.values import Json, Value

logger = structlog.get_logger()

BLOCK_INTERVAL_SECONDS = 60.0
POLLING_INTERVAL_SECONDS = 1.0
HEIGHT_WAIT_BLOCKS = 3

_KNOWN_CHAINS = {
    MAINNET_URL: ChainId.MAINNET,
    TESTNET_URL: ChainId.TESTNET,
    STAGENET_URL: ChainId.STAGENET,
    LOCAL_URL: ChainId.PRIVATE,
}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class NodeError(WavesError):
    """Raised when the node answers a request with an error status."""

    def __init__(self, status: int, message: str, code: int | None = None) -> None:
        self.status = status
        self.message = message
        self.code = code
        super().__init__(f"node error {status}: {message}")


class NodeNotFoundError(NodeError):
    """Raised when the requested entity is unknown to the node (HTTP 404)."""


class NodeConnectionError(WavesError):
    """Raised when the SDK cannot reach the node."""


class NodeTimeoutError(WavesError):
    """Raised when a request or a wait helper exceeds its deadline."""


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class Node:
    """Async REST client for a Waves node.

    Args:
        url: Base URL of the node (e.g. ``"https://nodes-testnet.wavesnodes.com"``).
        chain_id: Chain of the node. When omitted it is taken from the
            well-known URLs and otherwise defaults to mainnet; use
            :meth:`connect` to ask the node itself.
        timeout: Default request timeout in seconds.
        wait_seconds: Default deadline of the ``wait_*`` helpers.
        polling_interval: Default delay between their polls.

    Example::

        async with await Node.connect(TESTNET_URL) as node:
            height = await node.get_height()
    """

    def __init__(
        self,
        url: str,
        chain_id: ChainId | str | int | None = None,
        *,
        timeout: float = 30.0,
        wait_seconds: float = BLOCK_INTERVAL_SECONDS,
        polling_interval: float = POLLING_INTERVAL_SECONDS,
    ) -> None:
        self._url = url.rstrip("/")
        self._timeout = timeout
        self._wait_seconds = wait_seconds
        self._polling_interval = polling_interval
        if chain_id is None:
            chain_id = _KNOWN_CHAINS.get(self._url)
        self._chain_id = resolve_chain_id(chain_id)
        self._client: httpx.AsyncClient | None = None

    @classmethod
    async def connect(
        cls,
        url: str,
        chain_id: ChainId | str | int | None = None,
        *,
        timeout: float = 30.0,
    ) -> "Node":
        """Create a client whose chain id is known.

        An explicit ``chain_id`` wins, then the well-known public URLs, then
        the chain byte of the first address the node reports.
        """
        node = cls(url, chain_id, timeout=timeout)
        if chain_id is None and node._url not in _KNOWN_CHAINS:
            addresses = await node.get_addresses()
            if addresses:
                node._chain_id = addresses[0].chain_id()
            logger.debug("chain_id_resolved", url=node._url, chain_id=str(node._chain_id))
        return node

    @classmethod
    def from_settings(cls, settings: WavesSettings) -> "Node":
        """Client for ``settings.node_url`` on ``settings.chain()``.

        The request timeout and the wait helpers' deadline and polling
        interval come from the settings too.
        """
        return cls(
            settings.node_url,
            settings.chain(),
            timeout=settings.timeout,
            wait_seconds=settings.wait_seconds,
            polling_interval=settings.polling_interval,
        )

    @property
    def url(self) -> str:
        return self._url

    @property
    def chain_id(self) -> ChainId:
        return self._chain_id

    # ----- lifecycle -------------------------------------------------------

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._url,
                timeout=self._timeout,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "Node":
        await self._ensure_client()
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ----- internal helpers ------------------------------------------------

    async def _request(self, method: str, path: str, **kwargs: Any) -> Value:
        """Send a request and return the decoded JSON body."""
        client = await self._ensure_client()
        logger.debug("node_request", method=method, path=path)
        try:
            resp = await client.request(method, path, **kwargs)
        except httpx.ConnectError as exc:
            raise NodeConnectionError(f"cannot reach {self._url}: {exc}") from exc
        except httpx.TimeoutException as exc:
            raise NodeTimeoutError(f"request to {self._url}{path} timed out") from exc

        if resp.is_error:
            raise self._error(resp)
        return Value(resp.json())

    @staticmethod
    def _error(resp: httpx.Response) -> NodeError:
        message = resp.text or resp.reason_phrase
        code = None
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = str(body.get("message", message))
            if isinstance(body.get("error"), int):
                code = body["error"]
        error_class = NodeNotFoundError if resp.status_code == 404 else NodeError
        return error_class(resp.status_code, message, code)

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Value:
        return await self._request("GET", path, params=params)

    async def _post(self, path: str, body: Json | dict[str, Any] | list[Any]) -> Value:
        if isinstance(body, Json):
            body = body.data
        return await self._request("POST", path, json=body)

    def _wait_limits(self, timeout: float | None, poll_interval: float | None) -> tuple[float, float]:
        return (
            self._wait_seconds if timeout is None else timeout,
            self._polling_interval if poll_interval is None else poll_interval,
        )

    def _transaction(self, value: Value) -> Transaction:
        return Transaction.from_json(value.as_json(), self._chain_id)

    # ----- addresses -------------------------------------------------------

    async def get_addresses(self) -> list[Address]:
        """Addresses of the node's own wallet."""
        return [v.as_address() for v in await self._get("/addresses")]

    async def get_balance(self, address: Address, confirmations: int | None = None) -> int:
        path = f"/addresses/balance/{address}"
        if confirmations is not None:
            path += f"/{confirmations}"
        return (await self._get(path)).as_json().get("balance").as_int()

    async def get_balances(self, addresses: Iterable[Address], height: int | None = None) -> list[Balance]:
        body: dict[str, Any] = {"addresses": [a.to_string() for a in addresses]}
        if height is not None:
            body["height"] = height
        return [Balance(j) for j in (await self._post("/addresses/balance", body)).as_json_list()]

    async def get_balance_details(self, address: Address) -> BalanceDetails:
        return BalanceDetails((await self._get(f"/addresses/balance/details/{address}")).as_json())

    async def get_data(self, address: Address, regex: str | None = None) -> list[DataEntry]:
        """Entries of the account storage, optionally filtered by a key regex."""
        params = {"matches": regex} if regex is not None else None
        return [v.as_data_entry() for v in await self._get(f"/addresses/data/{address}", params)]

    async def get_data_by_key(self, address: Address, key: str) -> DataEntry:
        return (await self._get(f"/addresses/data/{address}/{key}")).as_data_entry()

    async def get_script_info(self, address: Address) -> ScriptInfo:
        return ScriptInfo((await self._get(f"/addresses/scriptInfo/{address}")).as_json())

    async def get_script_meta(self, address: Address) -> ScriptMeta:
        """Callable function metadata; an address without a dApp gives empty meta."""
        json = (await self._get(f"/addresses/scriptInfo/{address}/meta")).as_json()
        if not json.exists("meta"):
            return ScriptMeta({"version": 0, "callableFuncTypes": {}})
        return ScriptMeta(json.get("meta").as_json())

    # ----- aliases ---------------------------------------------------------

    async def get_aliases_by_address(self, address: Address) -> list[Alias]:
        return [v.as_alias() for v in await self._get(f"/alias/by-address/{address}")]

    async def get_address_by_alias(self, alias: Alias) -> Address:
        return (await self._get(f"/alias/by-alias/{alias.name}")).as_json().get("address").as_address()

    # ----- assets ----------------------------------------------------------

    async def get_asset_distribution(
        self,
        asset_id: AssetId,
        height: int,
        limit: int = 1000,
        after: Address | None = None,
    ) -> AssetDistribution:
        params = {"after": after.to_string()} if after is not None else None
        path = f"/assets/{asset_id}/distribution/{height}/limit/{limit}"
        return AssetDistribution((await self._get(path, params)).as_json())

    async def get_assets_balance(self, address: Address) -> list[AssetBalance]:
        json = (await self._get(f"/assets/balance/{address}")).as_json()
        return [AssetBalance(j) for j in json.get("balances").as_json_list()]

    async def get_asset_balance(self, address: Address, asset_id: AssetId) -> int:
        if asset_id.is_waves:
            return await self.get_balance(address)
        json = (await self._get(f"/assets/balance/{address}/{asset_id}")).as_json()
        return json.get("balance").as_int()

    async def get_asset_details(self, asset_id: AssetId) -> AssetDetails:
        json = (await self._get(f"/assets/details/{asset_id}", {"full": "true"})).as_json()
        return AssetDetails(json)

    # ----- blocks ----------------------------------------------------------

    async def get_height(self) -> int:
        """Return the current blockchain height."""
        return (await self._get("/blocks/height")).as_json().get("height").as_int()

    async def get_block_headers_by_height(self, height: int) -> BlockHeaders:
        return BlockHeaders((await self._get(f"/blocks/headers/at/{height}")).as_json())

    async def get_last_block_headers(self) -> BlockHeaders:
        return BlockHeaders((await self._get("/blocks/headers/last")).as_json())

    async def get_block_by_height(self, height: int) -> Block:
        return Block((await self._get(f"/blocks/at/{height}")).as_json(), self._chain_id)

    async def get_block_by_id(self, block_id: Id) -> Block:
        return Block((await self._get(f"/blocks/{block_id}")).as_json(), self._chain_id)

    async def get_blockchain_rewards(self, height: int | None = None) -> BlockchainRewards:
        path = "/blockchain/rewards" if height is None else f"/blockchain/rewards/{height}"
        return BlockchainRewards((await self._get(path)).as_json())

    # ----- node & debug ----------------------------------------------------

    async def get_version(self) -> str:
        return (await self._get("/node/version")).as_json().get("version").as_str()

    async def get_balance_history(self, address: Address) -> list[HistoryBalance]:
        return [HistoryBalance(j) for j in (await self._get(f"/debug/balances/history/{address}")).as_json_list()]

    async def validate_transaction(self, transaction: Transaction) -> Validation:
        return Validation((await self._post("/debug/validate", transaction.json)).as_json())

    # ----- leasing ---------------------------------------------------------

    async def get_active_leases(self, address: Address) -> list[LeaseInfo]:
        return [LeaseInfo(j) for j in (await self._get(f"/leasing/active/{address}")).as_json_list()]

    async def get_lease_info(self, lease_id: Id) -> LeaseInfo:
        return LeaseInfo((await self._get(f"/leasing/info/{lease_id}")).as_json())

    async def get_leases_info(self, lease_ids: Iterable[Id]) -> list[LeaseInfo]:
        body = {"ids": [i.to_string() for i in lease_ids]}
        return [LeaseInfo(j) for j in (await self._post("/leasing/info", body)).as_json_list()]

    # ----- transactions ----------------------------------------------------

    async def calculate_transaction_fee(self, transaction: Transaction) -> Amount:
        json = (await self._post("/transactions/calculateFee", transaction.json)).as_json()
        return Amount.from_json(json, "feeAmount", "feeAssetId")

    async def broadcast(self, transaction: Transaction) -> Transaction:
        """Broadcast a signed transaction and return the node's echo of it.

        Args:
            transaction: A transaction carrying at least one proof.

        Returns:
            The transaction parsed from the node response.
        """
        logger.info("broadcast", tx_id=transaction.id.to_string(), type=transaction.type)
        return self._transaction(await self._post("/transactions/broadcast", transaction.json))

    async def get_transaction_info(self, tx_id: Id) -> TransactionInfo:
        json = (await self._get(f"/transactions/info/{tx_id}")).as_json()
        return TransactionInfo(json, self._chain_id)

    async def get_transactions_by_address(
        self, address: Address, limit: int = 100, after: Id | None = None
    ) -> list[TransactionInfo]:
        params = {"after": after.to_string()} if after is not None else None
        value = await self._get(f"/transactions/address/{address}/limit/{limit}", params)
        pages = value.as_list()
        if not pages:
            return []
        return [TransactionInfo(j, self._chain_id) for j in Value(pages[0]).as_json_list()]

    async def get_transaction_status(self, tx_id: Id) -> TransactionStatus:
        value = await self._get("/transactions/status", {"id": tx_id.to_string()})
        return TransactionStatus(value.as_json_list()[0])

    async def get_transactions_status(self, tx_ids: Iterable[Id]) -> list[TransactionStatus]:
        body = {"ids": [i.to_string() for i in tx_ids]}
        return [TransactionStatus(j) for j in (await self._post("/transactions/status", body)).as_json_list()]

    async def get_unconfirmed_transaction(self, tx_id: Id) -> Transaction:
        return self._transaction(await self._get(f"/transactions/unconfirmed/info/{tx_id}"))

    async def get_unconfirmed_transactions(self) -> list[Transaction]:
        return [self._transaction(v) for v in await self._get("/transactions/unconfirmed")]

    async def get_utx_size(self) -> int:
        return (await self._get("/transactions/unconfirmed/size")).as_json().get("size").as_int()

    # ----- utils -----------------------------------------------------------

    async def compile_script(self, source: str, compact: bool | None = None) -> ScriptInfo:
        """Compile Ride source code on the node."""
        client = await self._ensure_client()
        params = {"compact": "true" if compact else "false"} if compact is not None else None
        try:
            resp = await client.post(
                "/utils/script/compileCode",
                content=source.encode(),
                params=params,
                headers={"Content-Type": "text/plain"},
            )
        except httpx.ConnectError as exc:
            raise NodeConnectionError(f"cannot reach {self._url}: {exc}") from exc
        except httpx.TimeoutException as exc:
            raise NodeTimeoutError(f"script compilation on {self._url} timed out") from exc
        if resp.is_error:
            raise self._error(resp)
        return ScriptInfo(Value(resp.json()).as_json())

    # ----- waiting ---------------------------------------------------------

    async def wait_for_transaction(
        self,
        tx_id: Id,
        *,
        timeout: float | None = None,
        poll_interval: float | None = None,
    ) -> TransactionInfo:
        """Poll the node until a transaction is in the blockchain.

        Args:
            tx_id: Id of the transaction to watch.
            timeout: Maximum seconds to wait. Defaults to the client's
                ``wait_seconds``.
            poll_interval: Seconds between poll attempts. Defaults to the
                client's ``polling_interval``.

        Returns:
            The :class:`TransactionInfo` of the confirmed transaction.

        Raises:
            NodeTimeoutError: If *timeout* is exceeded.
        """
        timeout, poll_interval = self._wait_limits(timeout, poll_interval)
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            try:
                return await self.get_transaction_info(tx_id)
            except NodeNotFoundError:
                logger.debug("waiting_for_transaction", tx_id=tx_id.to_string())
                await asyncio.sleep(poll_interval)

        raise NodeTimeoutError(f"transaction {tx_id} not confirmed within {timeout}s")

    async def wait_for_transactions(
        self,
        tx_ids: Iterable[Id],
        *,
        timeout: float | None = None,
        poll_interval: float | None = None,
    ) -> list[TransactionStatus]:
        """Poll until every transaction of ``tx_ids`` is confirmed."""
        timeout, poll_interval = self._wait_limits(timeout, poll_interval)
        ids = list(tx_ids)
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            statuses = await self.get_transactions_status(ids)
            if all(s.status == Status.CONFIRMED for s in statuses):
                return statuses
            logger.debug(
                "waiting_for_transactions",
                pending=sum(1 for s in statuses if s.status != Status.CONFIRMED),
            )
            await asyncio.sleep(poll_interval)

        raise NodeTimeoutError(f"{len(ids)} transactions not confirmed within {timeout}s")

    async def wait_for_height(
        self,
        target: int,
        *,
        timeout: float | None = None,
        poll_interval: float | None = None,
    ) -> int:
        """Poll until the chain reaches ``target`` and return the height seen.

        The deadline restarts every time the height grows, so ``timeout``
        bounds the wait for each next block rather than the whole climb.
        It defaults to :data:`HEIGHT_WAIT_BLOCKS` times ``wait_seconds``.
        """
        if timeout is None:
            timeout = self._wait_seconds * HEIGHT_WAIT_BLOCKS
        timeout, poll_interval = self._wait_limits(timeout, poll_interval)
        current = await self.get_height()
        previous = current
        deadline = time.monotonic() + timeout
        while current < target:
            if current > previous:
                previous = current
                deadline = time.monotonic() + timeout
            if time.monotonic() >= deadline:
                raise NodeTimeoutError(f"height {target} not reached within {timeout}s")
            logger.debug("waiting_for_height", height=current, target=target)
            await asyncio.sleep(poll_interval)
            current = await self.get_height()
        return current

    async def wait_blocks(
        self,
        count: int,
        *,
        timeout: float | None = None,
        poll_interval: float | None = None,
    ) -> int:
        """Wait for ``count`` more blocks on top of the current height."""
        target = await self.get_height() + count
        return await self.wait_for_height(target, timeout=timeout, poll_interval=poll_interval)
