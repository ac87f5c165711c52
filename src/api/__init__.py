"""API layer package.

This package contains:
- Controllers: REST API endpoints using Neuroglia ControllerBase
- Dependencies: FastAPI dependencies for bearer authentication and roles
- Services: Token authentication, OpenAPI configuration
"""
