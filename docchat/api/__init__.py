"""
API routes module.

FastAPI routers, dependency container and application factory.
"""
