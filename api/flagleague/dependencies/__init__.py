"""FastAPI dependencies for the flag-league API."""

from .auth import CurrentUser, get_current_user, require_admin, require_user

__all__ = ["CurrentUser", "get_current_user", "require_admin", "require_user"]
