"""Message records as stored in a conversation log."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from apimetrics.types import MessageType, SayKind


class LogMessage(BaseModel):
    """One entry in the host's message log.

    Only ``say`` messages tagged ``api_req_started`` carry request metrics;
    their ``text`` is a JSON object encoded as a string.
    """

    model_config = ConfigDict(extra="ignore")

    ts: int
    type: MessageType = MessageType.SAY
    say: str | None = None
    ask: str | None = None
    text: str | None = None

    @property
    def is_api_request_started(self) -> bool:
        return self.type == MessageType.SAY and self.say == SayKind.API_REQ_STARTED.value
