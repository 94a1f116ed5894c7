"""Application layer module.

Contains application services (use cases) that sit outside the
catalog itself.
"""

from catalog_api.application.user_service import SignInResult, UserService

__all__ = [
    "SignInResult",
    "UserService",
]
