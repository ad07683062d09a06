"""Relay to the externally hosted conversational agent"""
from wellness.chat.relay import ChatRelay, DEFAULT_REPLY

__all__ = ["ChatRelay", "DEFAULT_REPLY"]
