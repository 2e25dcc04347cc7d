"""
API server package — HTTP tool surface for agent runtimes.

Exposes the six gateway operations as JSON endpoints. The environment is read
once, when the app starts, to build the gateway's configuration.
"""
