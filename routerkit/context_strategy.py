"""Strategies for fitting a conversation into a model's context window."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence

from .chat import Message

Summarizer = Callable[[list[Message]], Message]


class ContextStrategy(ABC):
    """Shrinks a list of messages so that it fits a context budget."""

    @abstractmethod
    def fit_to_context(self, messages: Sequence[Message], max_tokens: int) -> list[Message]:
        """Return the messages to send, reduced to fit ``max_tokens``."""

    @abstractmethod
    def compress(self, messages: Sequence[Message]) -> list[Message]:
        """Return a shorter equivalent of the messages."""


def merge_consecutive_roles(messages: Iterable[Message]) -> list[Message]:
    """Join runs of messages with the same role into one message.

    Contents are joined with a blank line; messages with empty content are
    dropped, as are names and tool calls.
    """
    merged: list[Message] = []
    role = ""
    content = ""
    for message in messages:
        if message.role == role and content:
            content = f"{content}\n\n{message.content}"
            continue
        if role and content:
            merged.append(Message(role=role, content=content))
        role = message.role
        content = message.content
    if role and content:
        merged.append(Message(role=role, content=content))
    return merged


class SlidingWindowStrategy(ContextStrategy):
    """Keeps only the most recent messages, optionally with the first one."""

    def __init__(self, window_size: int, always_include_first: bool) -> None:
        if window_size < 0:
            raise ValueError("window_size cannot be negative")
        self.window_size = window_size
        self.always_include_first = always_include_first

    def fit_to_context(self, messages: Sequence[Message], max_tokens: int) -> list[Message]:
        if len(messages) <= self.window_size:
            return list(messages)
        result: list[Message] = []
        if self.always_include_first and messages:
            result.append(messages[0])
        reserved = 1 if self.always_include_first else 0
        window_start = max(len(messages) - max(self.window_size - reserved, 0), 0)
        result.extend(messages[window_start:])
        return result

    def compress(self, messages: Sequence[Message]) -> list[Message]:
        return self.fit_to_context(messages, sys.maxsize)


class SummaryStrategy(ContextStrategy):
    """Replaces older history with a summary, keeping the first and latest messages."""

    def __init__(self, summarizer: Summarizer, recent_count: int) -> None:
        if recent_count < 0:
            raise ValueError("recent_count cannot be negative")
        self.summarizer = summarizer
        self.recent_count = recent_count

    def fit_to_context(self, messages: Sequence[Message], max_tokens: int) -> list[Message]:
        if len(messages) <= self.recent_count + 1:
            return list(messages)
        split = len(messages) - self.recent_count
        history = list(messages[1:split])
        result = [messages[0]]
        if history:
            result.append(self.summarizer(history))
        result.extend(messages[split:])
        return result

    def compress(self, messages: Sequence[Message]) -> list[Message]:
        return self.fit_to_context(messages, sys.maxsize)