"""Serializers subpackage for keypath.

The base install ships ``JsonChangeSerializer`` and the ``ValueCodec`` it
uses to encode payload values by their declared types (through pydantic).

All serializers satisfy the ``ChangeSerializer`` Protocol structurally.
"""

from keypath.serializers.json_serializer import JsonChangeSerializer
from keypath.serializers.values import ValueCodec

__all__ = ["JsonChangeSerializer", "ValueCodec"]
