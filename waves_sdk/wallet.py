"""High-level wallet abstraction for Waves.

:class:`Wallet` bundles a private key with the chain it signs for and
builds signed transactions behind a small interface. It is the
recommended entry point for applications that hold keys and broadcast
through a :class:`~waves_sdk.client.Node`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, TypeVar

import structlog

from waves_sdk.account import Address, PrivateKey, PublicKey
from waves_sdk.data_entry import DataEntry
from waves_sdk.encoding import Base58String
from waves_sdk.transactions import (
    Amount,
    DataTransaction,
    FunctionCall,
    InvokeScriptTransaction,
    LeaseCancelTransaction,
    LeaseTransaction,
    Recipient,
    Transaction,
    TransferTransaction,
)
from waves_sdk.types import AssetId, ChainId, Id, resolve_chain_id

if TYPE_CHECKING:
    from waves_sdk.client import Node
    from waves_sdk.models import TransactionInfo

logger = structlog.get_logger()

TxT = TypeVar("TxT", bound=Transaction)


class Wallet:
    """In-memory Waves wallet holding a single private key.

    Wallets are created via :meth:`create`, :meth:`from_seed` or
    :meth:`from_private_key`. The key is held in memory and never
    serialised; callers manage persistence and encryption.
    """

    __slots__ = ("_private_key", "_chain_id")

    def __init__(self, private_key: PrivateKey, chain_id: ChainId | str | int | None = None) -> None:
        self._private_key = private_key
        self._chain_id = resolve_chain_id(chain_id)

    # ----- constructors ----------------------------------------------------

    @classmethod
    def create(cls, chain_id: ChainId | str | int | None = None) -> "Wallet":
        """Generate a new wallet with a random key."""
        return cls(PrivateKey.random(), chain_id)

    @classmethod
    def from_seed(
        cls, seed: str | bytes, nonce: int = 0, chain_id: ChainId | str | int | None = None
    ) -> "Wallet":
        """Derive the wallet of a seed phrase account at ``nonce``."""
        return cls(PrivateKey.from_seed(seed, nonce), chain_id)

    @classmethod
    def from_private_key(
        cls, private_key: PrivateKey | str, chain_id: ChainId | str | int | None = None
    ) -> "Wallet":
        if isinstance(private_key, str):
            private_key = PrivateKey.from_string(private_key)
        return cls(private_key, chain_id)

    # ----- properties ------------------------------------------------------

    @property
    def chain_id(self) -> ChainId:
        return self._chain_id

    @property
    def public_key(self) -> PublicKey:
        return self._private_key.public_key()

    @property
    def address(self) -> Address:
        """Address of the wallet key on the wallet chain."""
        return self._private_key.address(self._chain_id)

    # ----- signing ---------------------------------------------------------

    def sign(self, message: bytes) -> bytes:
        """Sign arbitrary bytes; returns the 64-byte signature."""
        return self._private_key.sign(message)

    def sign_transaction(self, transaction: Transaction, index: int | None = None) -> Transaction:
        """Add this wallet's proof to ``transaction``.

        Appends when ``index`` is omitted, which lets several wallets
        co-sign one transaction in turn.
        """
        return transaction.add_proof(self._private_key, index)

    def build_transfer(
        self,
        recipient: Recipient | str,
        amount: int,
        asset_id: AssetId | str | None = None,
        *,
        attachment: Base58String | bytes | None = None,
        fee: int | None = None,
    ) -> TransferTransaction:
        """Build and sign a transfer transaction.

        Args:
            recipient: Address, full alias or :class:`Recipient`.
            amount: Value in the smallest unit of the asset.
            asset_id: Asset to send. Defaults to WAVES.
            attachment: Optional opaque bytes.
            fee: Fee in WAVES. Defaults to the type's minimum fee.

        Returns:
            A signed :class:`TransferTransaction`.
        """
        tx = TransferTransaction.build(
            self.public_key,
            recipient,
            Amount.of(amount, asset_id),
            attachment,
            self._chain_id,
        )
        if fee is not None:
            tx.set_fee(fee)
        return self._sign(tx)

    def build_data(self, entries: Iterable[DataEntry]) -> DataTransaction:
        """Build and sign a data transaction with a size-based fee."""
        return self._sign(DataTransaction.build(self.public_key, entries, self._chain_id))

    def build_lease(self, recipient: Recipient | str, amount: int) -> LeaseTransaction:
        return self._sign(LeaseTransaction.build(self.public_key, recipient, amount, self._chain_id))

    def build_lease_cancel(self, lease_id: Id | str) -> LeaseCancelTransaction:
        return self._sign(LeaseCancelTransaction.build(self.public_key, lease_id, self._chain_id))

    def build_invoke(
        self,
        dapp: Recipient | str,
        function: FunctionCall | None = None,
        payments: Iterable[Amount] | None = None,
        *,
        fee: int | None = None,
    ) -> InvokeScriptTransaction:
        """Build and sign a dApp invocation; ``function=None`` calls the default."""
        tx = InvokeScriptTransaction.build(self.public_key, dapp, function, payments, self._chain_id)
        if fee is not None:
            tx.set_fee(fee)
        return self._sign(tx)

    def _sign(self, tx: TxT) -> TxT:
        tx.add_proof(self._private_key)
        return tx

    # ----- network ---------------------------------------------------------

    async def get_balance(self, node: "Node", asset_id: AssetId | None = None) -> int:
        """Query this wallet's balance of ``asset_id`` (WAVES by default)."""
        return await node.get_asset_balance(self.address, AssetId.WAVES if asset_id is None else asset_id)

    async def broadcast(self, node: "Node", transaction: Transaction) -> Transaction:
        """Sign if unsigned, then broadcast through ``node``."""
        if not transaction.proofs:
            self.sign_transaction(transaction)
        logger.info("wallet_broadcast", address=self.address.to_string(), tx_id=transaction.id.to_string())
        return await node.broadcast(transaction)

    async def broadcast_and_wait(self, node: "Node", transaction: Transaction) -> "TransactionInfo":
        """Broadcast and poll until the transaction is in the blockchain."""
        sent = await self.broadcast(node, transaction)
        return await node.wait_for_transaction(sent.id)

    async def get_transaction_history(self, node: "Node", limit: int = 100) -> list["TransactionInfo"]:
        """Most recent transactions involving this wallet."""
        return await node.get_transactions_by_address(self.address, limit)

    def __repr__(self) -> str:
        return f"Wallet(address={self.address}, chain_id={self._chain_id})"
