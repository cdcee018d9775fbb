"""
Integration tests for the menu generation gateway.

Exercise the assembled FastAPI application through TestClient, with provider
HTTP calls served by httpx.MockTransport.
"""
