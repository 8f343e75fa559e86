"""
notekeep auth: credentials, password hashing and identity tokens.

Provides JSON-backed user storage with bcrypt password hashing and
stateless HS256 JWT tokens.

Usage:
    from notekeep.auth import AuthService, CredentialStore, PasswordHasher, TokenIssuer
    from notekeep.storage import JsonFileStorage

    store = CredentialStore(JsonFileStorage(".notekeep/data/users.json"))
    service = AuthService(store, PasswordHasher(), TokenIssuer(secret="..."))
    user, token = service.signup("owl@example.com", "hunter2", "hunter2")
"""

from .gate import AuthGate, bearer_token
from .passwords import PasswordHasher
from .service import AuthService
from .store import CredentialStore
from .tokens import Identity, TokenIssuer

__all__ = [
    "AuthGate",
    "AuthService",
    "CredentialStore",
    "Identity",
    "PasswordHasher",
    "TokenIssuer",
    "bearer_token",
]
