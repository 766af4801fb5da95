"""
authz_service.auth

Authentication/authorization package.

Responsibilities:
- JWT helpers and validation.
- FastAPI auth dependencies (Principal + role guard).
"""

# Package marker.
