"""
Provider gateway: provider selection, model fallback and result tracking.
"""

from menu_gateway.gateway.generation import GenerationResult, ModelAttempt
from menu_gateway.gateway.provider_gateway import ProviderGateway

__all__ = ["GenerationResult", "ModelAttempt", "ProviderGateway"]
