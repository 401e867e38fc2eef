"""``waves/recipient.proto``.

.. code-block:: proto

    message Recipient {
        oneof recipient {
            bytes public_key_hash = 1;
            string alias = 2;
        }
    }
"""

from __future__ import annotations

from waves_sdk.proto import add_fields, message_class, new_file, register

FILE_PROTO = new_file("waves/recipient.proto")
add_fields(
    FILE_PROTO.message_type.add(name="Recipient"),
    [
        ("public_key_hash", 1, "bytes", "recipient"),
        ("alias", 2, "string", "recipient"),
    ],
)
register(FILE_PROTO)

Recipient = message_class("waves.Recipient")
