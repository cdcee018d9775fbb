"""
HTTP layer: routes, dependencies, error handlers and middleware.
"""
