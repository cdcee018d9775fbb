"""
Anthropic adapter (messages API).
"""

from typing import Any

from menu_gateway.models.provider_models import AnthropicResponse
from menu_gateway.providers.base_adapter import BaseProviderAdapter


class AnthropicAdapter(BaseProviderAdapter):
    response_model = AnthropicResponse

    def build_request(
        self, prompt: str, credentials: str, model: str
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        template = self.config.request_template
        headers = {
            "Content-Type": "application/json",
            "x-api-key": credentials,
            "anthropic-version": template.get("anthropic_version", "2023-06-01"),
        }
        body = {
            "model": model,
            "max_tokens": template.get("max_tokens", 6000),
            "messages": [{"role": "user", "content": prompt}],
        }
        return self.config.endpoint_for(model), headers, body
