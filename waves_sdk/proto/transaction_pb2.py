"""``waves/transaction.proto``: the ``Transaction`` message and the data
message of each supported transaction type.

Genesis, payment, exchange, ethereum and expression-invocation data are
not declared; the SDK never builds body bytes for those types.
"""

from __future__ import annotations

from waves_sdk.proto import REPEATED, add_fields, message_class, new_file, register
from waves_sdk.proto import amount_pb2, recipient_pb2  # noqa: F401  registers dependencies

_AMOUNT = ".waves.Amount"
_RECIPIENT = ".waves.Recipient"

FILE_PROTO = new_file("waves/transaction.proto", ["waves/amount.proto", "waves/recipient.proto"])


def _message(name: str, fields: list) -> None:
    add_fields(FILE_PROTO.message_type.add(name=name), fields)


_message(
    "Transaction",
    [
        ("chain_id", 1, "int32"),
        ("sender_public_key", 2, "bytes"),
        ("fee", 3, _AMOUNT),
        ("timestamp", 4, "int64"),
        ("version", 5, "int32"),
        ("issue", 103, ".waves.IssueTransactionData", "data"),
        ("transfer", 104, ".waves.TransferTransactionData", "data"),
        ("reissue", 105, ".waves.ReissueTransactionData", "data"),
        ("burn", 106, ".waves.BurnTransactionData", "data"),
        ("lease", 108, ".waves.LeaseTransactionData", "data"),
        ("lease_cancel", 109, ".waves.LeaseCancelTransactionData", "data"),
        ("create_alias", 110, ".waves.CreateAliasTransactionData", "data"),
        ("mass_transfer", 111, ".waves.MassTransferTransactionData", "data"),
        ("data_transaction", 112, ".waves.DataTransactionData", "data"),
        ("set_script", 113, ".waves.SetScriptTransactionData", "data"),
        ("sponsor_fee", 114, ".waves.SponsorFeeTransactionData", "data"),
        ("set_asset_script", 115, ".waves.SetAssetScriptTransactionData", "data"),
        ("invoke_script", 116, ".waves.InvokeScriptTransactionData", "data"),
        ("update_asset_info", 117, ".waves.UpdateAssetInfoTransactionData", "data"),
    ],
)
_message(
    "IssueTransactionData",
    [
        ("name", 1, "string"),
        ("description", 2, "string"),
        ("amount", 3, "int64"),
        ("decimals", 4, "int32"),
        ("reissuable", 5, "bool"),
        ("script", 6, "bytes"),
    ],
)
_message(
    "TransferTransactionData",
    [
        ("recipient", 1, _RECIPIENT),
        ("amount", 2, _AMOUNT),
        ("attachment", 3, "bytes"),
    ],
)
_message(
    "ReissueTransactionData",
    [
        ("asset_amount", 1, _AMOUNT),
        ("reissuable", 2, "bool"),
    ],
)
_message("BurnTransactionData", [("asset_amount", 1, _AMOUNT)])
_message(
    "LeaseTransactionData",
    [
        ("recipient", 1, _RECIPIENT),
        ("amount", 2, "int64"),
    ],
)
_message("LeaseCancelTransactionData", [("lease_id", 1, "bytes")])
_message("CreateAliasTransactionData", [("alias", 1, "string")])

_mass_transfer = FILE_PROTO.message_type.add(name="MassTransferTransactionData")
add_fields(
    _mass_transfer.nested_type.add(name="Transfer"),
    [
        ("recipient", 1, _RECIPIENT),
        ("amount", 2, "int64"),
    ],
)
add_fields(
    _mass_transfer,
    [
        ("asset_id", 1, "bytes"),
        ("transfers", 2, ".waves.MassTransferTransactionData.Transfer", REPEATED),
        ("attachment", 3, "bytes"),
    ],
)

_message(
    "DataEntry",
    [
        ("key", 1, "string"),
        ("int_value", 10, "int64", "value"),
        ("bool_value", 11, "bool", "value"),
        ("binary_value", 12, "bytes", "value"),
        ("string_value", 13, "string", "value"),
    ],
)
_message("DataTransactionData", [("data", 1, ".waves.DataEntry", REPEATED)])
_message("SetScriptTransactionData", [("script", 1, "bytes")])
_message("SponsorFeeTransactionData", [("min_fee", 1, _AMOUNT)])
_message(
    "SetAssetScriptTransactionData",
    [
        ("asset_id", 1, "bytes"),
        ("script", 2, "bytes"),
    ],
)
_message(
    "InvokeScriptTransactionData",
    [
        ("d_app", 1, _RECIPIENT),
        ("function_call", 2, "bytes"),
        ("payments", 3, _AMOUNT, REPEATED),
    ],
)
_message(
    "UpdateAssetInfoTransactionData",
    [
        ("asset_id", 1, "bytes"),
        ("name", 2, "string"),
        ("description", 3, "string"),
    ],
)
register(FILE_PROTO)

Transaction = message_class("waves.Transaction")
IssueTransactionData = message_class("waves.IssueTransactionData")
TransferTransactionData = message_class("waves.TransferTransactionData")
ReissueTransactionData = message_class("waves.ReissueTransactionData")
BurnTransactionData = message_class("waves.BurnTransactionData")
LeaseTransactionData = message_class("waves.LeaseTransactionData")
LeaseCancelTransactionData = message_class("waves.LeaseCancelTransactionData")
CreateAliasTransactionData = message_class("waves.CreateAliasTransactionData")
MassTransferTransactionData = message_class("waves.MassTransferTransactionData")
DataEntry = message_class("waves.DataEntry")
DataTransactionData = message_class("waves.DataTransactionData")
SetScriptTransactionData = message_class("waves.SetScriptTransactionData")
SponsorFeeTransactionData = message_class("waves.SponsorFeeTransactionData")
SetAssetScriptTransactionData = message_class("waves.SetAssetScriptTransactionData")
InvokeScriptTransactionData = message_class("waves.InvokeScriptTransactionData")
UpdateAssetInfoTransactionData = message_class("waves.UpdateAssetInfoTransactionData")
MassTransfer = message_class("waves.MassTransferTransactionData.Transfer")
