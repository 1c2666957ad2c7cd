"""
Exception taxonomy for page assembly.

Fatal infrastructure failures surface as ServiceError and become 500 responses;
missing or hidden organizations surface as OrganizationNotFound and become 404.
"""
from __future__ import annotations


class OrgHomeError(Exception):
    """Base class for org home errors."""


class OrganizationNotFound(OrgHomeError):
    """Raised when the organization does not exist or is hidden from the viewer."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Organization '{name}' not found")
        self.name = name


class ServiceError(OrgHomeError):
    """Raised when a collaborator whose output the page depends on fails."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        super().__init__(f"{operation}: {cause}")
        self.operation = operation
        self.cause = cause


class RenderError(OrgHomeError):
    """Raised when markup rendering fails."""
