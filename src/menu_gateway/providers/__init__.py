"""
Provider adapters: one per upstream text-generation API.
"""

from menu_gateway.providers.anthropic_adapter import AnthropicAdapter
from menu_gateway.providers.base_adapter import BaseProviderAdapter
from menu_gateway.providers.exceptions import (
    MODEL_UNAVAILABLE_STATUSES,
    MissingContentError,
    UpstreamError,
    UpstreamTimeoutError,
)
from menu_gateway.providers.google_adapter import GoogleAdapter
from menu_gateway.providers.groq_adapter import GroqAdapter
from menu_gateway.providers.registry import ADAPTER_CLASSES, build_adapters, build_provider_configs

__all__ = [
    "ADAPTER_CLASSES",
    "AnthropicAdapter",
    "BaseProviderAdapter",
    "GoogleAdapter",
    "GroqAdapter",
    "MODEL_UNAVAILABLE_STATUSES",
    "MissingContentError",
    "UpstreamError",
    "UpstreamTimeoutError",
    "build_adapters",
    "build_provider_configs",
]
