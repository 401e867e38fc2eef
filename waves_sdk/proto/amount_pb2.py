"""``waves/amount.proto``.

.. code-block:: proto

    message Amount {
        bytes asset_id = 1;
        int64 amount = 2;
    }
"""

from __future__ import annotations

from waves_sdk.proto import add_fields, message_class, new_file, register

FILE_PROTO = new_file("waves/amount.proto")
add_fields(
    FILE_PROTO.message_type.add(name="Amount"),
    [
        ("asset_id", 1, "bytes"),
        ("amount", 2, "int64"),
    ],
)
register(FILE_PROTO)

Amount = message_class("waves.Amount")
