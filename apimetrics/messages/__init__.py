"""Conversation message log: models and JSON store."""

from apimetrics.messages.models import LogMessage
from apimetrics.messages.store import append_message, load_messages, save_messages

__all__ = ["LogMessage", "append_message", "load_messages", "save_messages"]
