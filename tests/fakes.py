"""
Test doubles shared across the suite.

``FakeRenderer`` is a duck-typed replacement for ``GeminiRenderer`` so the
service, controller and API can be exercised without the SDK or network.
"""

from __future__ import annotations

from typing import Any

from polyglot_chat.translation.types import ModelReply
from tests.constants import payload_json


class FakeChat:
    """Stand-in for an SDK chat handle; records every message sent on it."""

    def __init__(self, target_language: str, number: int) -> None:
        self.target_language = target_language
        self.number = number
        self.sent: list[list[Any]] = []


class FakeRenderer:
    """
    Duck-typed replacement for ``GeminiRenderer``.

    ``replies`` is consumed in order; each entry is either a ``ModelReply``
    or an exception instance to raise. When it runs out, a valid reply is
    returned.
    """

    def __init__(self, replies: list[Any] | None = None) -> None:
        self.replies = list(replies or [])
        self.chats: list[FakeChat] = []

    def create_chat(self, target_language: str) -> FakeChat:
        chat = FakeChat(target_language, len(self.chats) + 1)
        self.chats.append(chat)
        return chat

    def send(self, chat: FakeChat, parts: list[Any]) -> ModelReply:
        chat.sent.append(list(parts))
        reply = self.replies.pop(0) if self.replies else ModelReply(payload_json(), "STOP")
        if isinstance(reply, BaseException):
            raise reply
        return reply
