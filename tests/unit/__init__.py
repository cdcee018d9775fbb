"""
Unit tests for the menu generation gateway.

Test individual components in isolation:
- Rate limiter and client key detection
- Request validation and response sanitization
- Provider adapters (httpx.MockTransport)
- Provider gateway state machine (AsyncMock adapters)
- Error classification
"""
