"""
Provider configuration and response envelope models.

ProviderConfig is static: built once from Settings at startup and frozen.
The three response models are the provider envelopes; each adapter validates
only its own envelope and asks it for the single text field. Unknown keys
are ignored.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from menu_gateway.models.enums import ProviderName


class ProviderConfig(BaseModel):
    """Static description of one text-generation provider."""

    model_config = ConfigDict(frozen=True)

    name: ProviderName = Field(..., description="Provider identifier")
    display_name: str = Field(..., description="Friendly name for logs and /api/health")
    endpoint_template: str = Field(
        ...,
        description="Endpoint URL; may contain a {model} placeholder",
    )
    credential_env_var: str = Field(..., description="Environment variable holding the API key")
    models: tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Ordered model identifiers, first is preferred",
    )
    request_template: dict[str, Any] = Field(
        default_factory=dict,
        description="Provider-specific generation parameters (temperature, max tokens, ...)",
    )

    def endpoint_for(self, model: str) -> str:
        return self.endpoint_template.format(model=model)

    @property
    def default_model(self) -> str:
        return self.models[0]


class _Envelope(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


# === Groq (OpenAI-compatible chat completions) ===

class GroqMessage(_Envelope):
    content: Optional[str] = None


class GroqChoice(_Envelope):
    message: Optional[GroqMessage] = None


class GroqResponse(_Envelope):
    """{"choices": [{"message": {"content": "..."}}]}"""

    choices: list[GroqChoice] = Field(default_factory=list)

    def text(self) -> Optional[str]:
        if not self.choices or self.choices[0].message is None:
            return None
        return self.choices[0].message.content


# === Google Gemini (generateContent) ===

class GooglePart(_Envelope):
    text: Optional[str] = None


class GoogleContent(_Envelope):
    parts: list[GooglePart] = Field(default_factory=list)


class GoogleCandidate(_Envelope):
    content: Optional[GoogleContent] = None
    finish_reason: Optional[str] = Field(default=None, alias="finishReason")


class GoogleResponse(_Envelope):
    """{"candidates": [{"content": {"parts": [{"text": "..."}]}}]}"""

    candidates: list[GoogleCandidate] = Field(default_factory=list)

    def text(self) -> Optional[str]:
        if not self.candidates:
            return None
        content = self.candidates[0].content
        if content is None or not content.parts:
            return None
        return content.parts[0].text


# === Anthropic (messages API) ===

class AnthropicContentBlock(_Envelope):
    type: str = "text"
    text: Optional[str] = None


class AnthropicResponse(_Envelope):
    """{"content": [{"type": "text", "text": "..."}]}"""

    content: list[AnthropicContentBlock] = Field(default_factory=list)
    stop_reason: Optional[str] = None

    def text(self) -> Optional[str]:
        for block in self.content:
            if block.type == "text":
                return block.text
        return None
