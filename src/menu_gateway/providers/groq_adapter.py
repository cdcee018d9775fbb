"""
Groq adapter (OpenAI-compatible chat completions).
"""

from typing import Any

from menu_gateway.models.provider_models import GroqResponse
from menu_gateway.providers.base_adapter import BaseProviderAdapter


class GroqAdapter(BaseProviderAdapter):
    """Bearer-authenticated chat completion call in JSON mode."""

    response_model = GroqResponse

    def build_request(
        self, prompt: str, credentials: str, model: str
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        template = self.config.request_template
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {credentials}",
        }
        body = {
            "model": model,
            "messages": [
                {"role": "system", "content": template.get("system_message", "")},
                {"role": "user", "content": prompt},
            ],
            "temperature": template.get("temperature", 0.7),
            "max_tokens": template.get("max_tokens", 8000),
            "response_format": {"type": "json_object"},
        }
        return self.config.endpoint_for(model), headers, body
