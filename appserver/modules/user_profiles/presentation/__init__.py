"""
User Profiles Presentation Layer

FastAPI routers and the dependency providers that compose each request's
persistence context, repositories and processing service.
"""
