"""Shared enums and type aliases."""

from enum import Enum


class MessageType(str, Enum):
    ASK = "ask"
    SAY = "say"


class SayKind(str, Enum):
    API_REQ_STARTED = "api_req_started"
    API_REQ_FINISHED = "api_req_finished"
    TEXT = "text"
    ERROR = "error"


class ChartKind(str, Enum):
    HISTORY = "history"
    PROVIDERS = "providers"
    MODELS = "models"
