"""
API route modules.

- org_home: the organization landing page (GET /{org}/)

Routers are included from src.api.main.
"""
