"""
Public Pydantic schemas used by FastAPI routes, services, and tests.

Includes the org home page payload and common reusable models such as
standard messages and error envelopes.
"""

from .common import MessageResponse  # noqa: F401
from .org_home import OrgHomeResponse  # noqa: F401
