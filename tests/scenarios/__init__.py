"""End-to-end scenarios for the version redirect service.

Each scenario drives the ASGI application through a test client, with the
registry and fallback origin replaced by an in-process fake network.
"""
