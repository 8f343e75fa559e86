"""
notekeep: a minimal note-taking backend.

Users sign up and sign in with an email and password, receive a signed
24-hour token, and use it to create, list, update and delete their own
text notes. Users and notes live in two flat JSON files.

Architecture:
    aiohttp route → AuthGate (token → identity) → NoteStore(owner=identity.user_id)
    aiohttp route → AuthService → PasswordHasher / CredentialStore / TokenIssuer

Components:
    - RecordStorage: load-all / save-all interface (JsonFileStorage on disk)
    - CredentialStore: user records, unique email
    - PasswordHasher: bcrypt hash and verify
    - TokenIssuer: HS256 JWT issue and verify
    - NoteStore: owner-scoped note records, store-wide id allocation
    - AuthGate: bearer token guard in front of every note route

Usage:
    from notekeep.web import build_app
    from notekeep.config import load_config

    app = build_app(load_config(".notekeep/config.json"))
"""

__version__ = "0.1.0"

from .errors import (
    AuthenticationError,
    ConflictError,
    Forbidden,
    InternalError,
    InvalidTokenError,
    NotekeepError,
    NotFoundError,
    Unauthenticated,
    ValidationError,
)
from .models import Note, User
from .notes import NoteStore
from .storage import JsonFileStorage, RecordStorage

__all__ = [
    "AuthenticationError",
    "ConflictError",
    "Forbidden",
    "InternalError",
    "InvalidTokenError",
    "NotekeepError",
    "NotFoundError",
    "Unauthenticated",
    "ValidationError",
    "Note",
    "User",
    "NoteStore",
    "JsonFileStorage",
    "RecordStorage",
]
