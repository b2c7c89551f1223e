"""Typed request/response models, validation helpers, context strategies and an MCP client for LLM routing APIs."""

__version__ = "0.1.6"