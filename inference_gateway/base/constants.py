"""Base shared constants for the gateway client.

Central location to avoid scattering magic strings and default numbers.
"""
from __future__ import annotations

DEFAULT_BASE_URL = "http://localhost:8080/v1"
DEFAULT_TIMEOUT_SECONDS = 30.0

# Server-Sent-Events framing
SSE_DATA_PREFIX = "data:"
SSE_DONE_SENTINEL = "[DONE]"

CHAT_COMPLETIONS_PATH = "/chat/completions"
MODELS_PATH = "/models"
MCP_TOOLS_PATH = "/mcp/tools"
PROXY_PATH_TEMPLATE = "/proxy/{provider}/{path}"
HEALTH_PATH = "/health"

DEFAULT_TOOL_TYPE = "function"

# Upper bound on raw frame text attached to decode-error reports
MAX_ERROR_RAW_CHARS = 260

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
    "CHAT_COMPLETIONS_PATH",
    "MODELS_PATH",
    "MCP_TOOLS_PATH",
    "PROXY_PATH_TEMPLATE",
    "HEALTH_PATH",
    "DEFAULT_TOOL_TYPE",
    "MAX_ERROR_RAW_CHARS",
]
