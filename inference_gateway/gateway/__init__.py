"""Gateway client package."""

from .client import InferenceGatewayClient

__all__ = ["InferenceGatewayClient"]
