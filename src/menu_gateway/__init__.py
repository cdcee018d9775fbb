"""
Menu generation gateway for the family meal-planning app.

Accepts a prompt on POST /api/generate-menu and forwards it to one of several
third-party LLM providers, returning the provider's JSON payload:
- Per-client fixed-window rate limiting
- Provider selection by priority (Groq, Google Gemini, Anthropic Claude)
- Per-provider model fallback on 404/429
- Markdown-fence stripping and strict JSON parsing of replies
- Error classification into API / VALIDATION / RATE_LIMIT / SYSTEM / UNKNOWN

Architecture: FastAPI orchestrator + httpx provider adapters + in-process rate limiter
"""

__version__ = "0.1.0"
