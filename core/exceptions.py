"""
core.exceptions

Error taxonomy shared by every app.

- ValidationError: Django's own django.core.exceptions.ValidationError, raised
  by forms and services at the write boundary and shown inline on forms.
- AuthorizationError: the acting user's role lacks a capability. Subclasses
  PermissionDenied so Django answers with HTTP 403.
- ConflictError: a save was based on stale data (event version mismatch).
- TransientStoreError: the database failed; the user may retry the action.
"""
from django.core.exceptions import PermissionDenied, ValidationError  # noqa: F401


class AuthorizationError(PermissionDenied):
    default_message = "Access denied."

    def __init__(self, capability=None, role=None, message=None):
        self.capability = capability
        self.role = role
        super().__init__(message or self.default_message)


class ConflictError(Exception):
    default_message = "This record was changed by someone else. Reload and try again."

    def __init__(self, message=None, *, expected_version=None, current_version=None):
        self.expected_version = expected_version
        self.current_version = current_version
        super().__init__(message or self.default_message)


class TransientStoreError(Exception):
    default_message = "The data store is temporarily unavailable. Please try again."

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
