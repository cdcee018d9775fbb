"""
Google Gemini adapter (generateContent).

The model is part of the URL; the key travels in the x-goog-api-key header
so it never shows up in access logs or error messages that echo the URL.
"""

from typing import Any

from menu_gateway.models.provider_models import GoogleResponse
from menu_gateway.providers.base_adapter import BaseProviderAdapter


class GoogleAdapter(BaseProviderAdapter):
    response_model = GoogleResponse

    def build_request(
        self, prompt: str, credentials: str, model: str
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        template = self.config.request_template
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": credentials,
        }
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": template.get("temperature", 0.7),
                "topK": template.get("top_k", 40),
                "topP": template.get("top_p", 0.95),
                "maxOutputTokens": template.get("max_output_tokens", 8192),
                "responseMimeType": template.get("response_mime_type", "application/json"),
            },
        }
        return self.config.endpoint_for(model), headers, body
