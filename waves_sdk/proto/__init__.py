"""Waves protobuf schemas.

The ``*_pb2`` modules declare the messages of the Waves ``protobuf-schemas``
that body bytes are made of (``waves/amount.proto``,
``waves/recipient.proto`` and ``waves/transaction.proto``) as
``FileDescriptorProto`` objects, register them in :data:`POOL` and expose
the message classes built by :mod:`google.protobuf.message_factory`.
"""

from __future__ import annotations

from typing import Any, Iterable

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import Message

POOL = descriptor_pool.DescriptorPool()

_F = descriptor_pb2.FieldDescriptorProto

_SCALARS = {
    "bool": _F.TYPE_BOOL,
    "bytes": _F.TYPE_BYTES,
    "int32": _F.TYPE_INT32,
    "int64": _F.TYPE_INT64,
    "string": _F.TYPE_STRING,
}

REPEATED = "repeated"

# (name, number, type, *flags); a flag is REPEATED or the name of a oneof.
FieldSpec = tuple[Any, ...]


def add_fields(message: descriptor_pb2.DescriptorProto, fields: Iterable[FieldSpec]) -> None:
    """Declare ``fields`` on ``message``.

    Types are proto scalar names or fully qualified message names
    (``.waves.Amount``).
    """
    oneofs: list[str] = []
    for name, number, kind, *flags in fields:
        field = message.field.add(name=name, number=number, label=_F.LABEL_OPTIONAL)
        if kind in _SCALARS:
            field.type = _SCALARS[kind]
        else:
            field.type = _F.TYPE_MESSAGE
            field.type_name = kind
        for flag in flags:
            if flag == REPEATED:
                field.label = _F.LABEL_REPEATED
                continue
            if flag not in oneofs:
                oneofs.append(flag)
                message.oneof_decl.add(name=flag)
            field.oneof_index = oneofs.index(flag)


def new_file(name: str, dependencies: Iterable[str] = ()) -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(name=name, package="waves", syntax="proto3")
    file_proto.dependency.extend(dependencies)
    return file_proto


def register(file_proto: descriptor_pb2.FileDescriptorProto) -> None:
    POOL.AddSerializedFile(file_proto.SerializeToString())


def message_class(full_name: str) -> type[Message]:
    return message_factory.GetMessageClass(POOL.FindMessageTypeByName(full_name))


def put(parent: Message, name: str, value: Message | None = None) -> Message:
    """Mark sub-message ``name`` of ``parent`` present and merge ``value`` in.

    An empty sub-message is still written, which body bytes rely on for
    zero amounts and empty payloads.
    """
    child = getattr(parent, name)
    child.SetInParent()
    if value is not None:
        child.MergeFrom(value)
    return child


def serialize(message: Message) -> bytes:
    return message.SerializeToString(deterministic=True)
