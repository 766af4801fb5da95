"""
authz_service.services

Service-layer package.

Responsibilities:
- Own transaction boundaries and persistence decisions.
- Apply role consistency rules on top of the user lookup and role store.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# `RoleService` depends only on the protocols in `services.ports`, so it can be
# exercised with in-memory fakes (see tests/test_role_service.py).
