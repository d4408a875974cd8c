from .base import ResourceModel
from .kv import KeyValue
from .node import NODE_PAYLOADS, BasicPayload, LogPayload, Node, StatusPayload
from .todo import Todo

__all__ = [
    "BasicPayload",
    "KeyValue",
    "LogPayload",
    "NODE_PAYLOADS",
    "Node",
    "ResourceModel",
    "StatusPayload",
    "Todo",
]
