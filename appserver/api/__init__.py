"""
HTTP API package: versioned routers and middleware.
"""
