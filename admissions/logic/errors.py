"""Errors raised by the chat engine and its collaborators."""


class InvalidChatInput(ValueError):
    """Message missing or empty; rejected before classification."""


class UpstreamFailure(RuntimeError):
    """The LLM or the document store failed to serve a call."""
