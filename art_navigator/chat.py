"""Chat session: turns utterances into filter updates."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from datetime import datetime

from .extractors.gateway import ExtractionGateway
from .log import Loggable
from .models import ExtractionOutcome
from .reconciler import QueryReconciler

WELCOME_MESSAGE = (
    "您好！我是您的AI艺术品导航助手。您可以用自然语言告诉我想查找的艺术品，"
    "比如：“显示文艺复兴时期意大利的画作”或“查找19世纪法国的印象派作品”。"
    "我会解析您的需求，并自动定位到相应的地点和时间。"
)
FALLBACK_NOTICE = "抱歉，暂时无法连接到AI服务，已使用本地匹配为您查找。"


@dataclass
class ChatMessage:
    id: str
    text: str
    sender: str  # "user" or "bot"
    timestamp: datetime = field(default_factory=datetime.now)


class ChatSession(Loggable):
    """
    Runs one extraction at a time and feeds the result to the reconciler.

    A submission that arrives while an extraction is outstanding is ignored,
    so a slow answer can never overwrite a newer one.
    """

    log_name = "CHAT"

    def __init__(self, gateway: ExtractionGateway, reconciler: QueryReconciler) -> None:
        self.gateway = gateway
        self.reconciler = reconciler
        self.busy = False
        self._ids = itertools.count(1)
        self.messages: list[ChatMessage] = [self._message(WELCOME_MESSAGE, "bot")]

    def _message(self, text: str, sender: str) -> ChatMessage:
        return ChatMessage(id=str(next(self._ids)), text=text, sender=sender)

    def submit(self, text: str) -> str | None:
        """
        Process one utterance and return the bot's reply.

        Returns None when the input is blank or another extraction is still
        running.
        """
        if not text or not text.strip():
            return None
        if self.busy:
            self._log_warning(f"Ignored submission while busy: {text[:40]!r}")
            return None

        self.messages.append(self._message(text, "user"))
        self.busy = True
        try:
            outcome = self.gateway.process_user_query(text)
        finally:
            self.busy = False

        reply = self._apply(outcome)
        self.messages.append(self._message(reply, "bot"))
        return reply

    def _apply(self, outcome: ExtractionOutcome) -> str:
        if not outcome.success:
            return " ".join(outcome.errors)

        partial = outcome.to_partial_query(self.reconciler.baseline)
        if not partial.is_empty:
            self.reconciler.apply(partial, source="chat")

        if outcome.fallback_used:
            return f"{FALLBACK_NOTICE}{outcome.message}"
        return outcome.message
