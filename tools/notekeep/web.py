"""aiohttp application exposing the auth and notes API.

Routes:
    POST   /auth/signup   {email, password, confirmPassword}   -> 201
    POST   /auth/signin   {email, password}                    -> 200
    GET    /notes                                              -> 200 [note, ...]
    POST   /notes         {title, content} | [{title, content}] -> 201 [note, ...]
    PUT    /notes/{id}    {title, content}                     -> 200 note
    DELETE /notes/{id}                                         -> 204

Every /notes route goes through the AuthGate first; the caller's user id is
the only owner the note store is ever asked about.
"""

from __future__ import annotations

import functools
import json
import logging
from typing import Any, Awaitable, Callable

from aiohttp import web

from .auth.gate import AuthGate, bearer_token
from .auth.passwords import PasswordHasher
from .auth.service import AuthService
from .auth.store import CredentialStore
from .auth.tokens import Identity, TokenIssuer
from .config import Settings
from .errors import Forbidden, NotekeepError, NotFoundError, ValidationError
from .notes import NoteStore
from .storage import JsonFileStorage, RecordStorage

logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]
IdentityHandler = Callable[[web.Request, Identity], Awaitable[web.StreamResponse]]

AUTH_SERVICE = web.AppKey("auth_service", AuthService)
AUTH_GATE = web.AppKey("auth_gate", AuthGate)
CREDENTIALS = web.AppKey("credentials", CredentialStore)
NOTE_STORE = web.AppKey("note_store", NoteStore)


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Turn NotekeepError into ``{"error": message}`` with its status."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except NotekeepError as exc:
        if exc.status >= 500:
            # storage details stay in the server log
            logger.error(f"{request.method} {request.path} failed: {exc.message}")
            return web.json_response({"error": "Internal server error."}, status=exc.status)
        return web.json_response({"error": exc.message}, status=exc.status)
    except Exception:
        logger.exception(f"Unexpected error handling {request.method} {request.path}")
        return web.json_response({"error": "Internal server error."}, status=500)


def authenticated(handler: IdentityHandler) -> Handler:
    """Resolve the bearer token before the handler runs.

    The handler receives the caller's identity as its second argument.
    """

    @functools.wraps(handler)
    async def wrapper(request: web.Request) -> web.StreamResponse:
        token = bearer_token(request.headers.get("Authorization"))
        identity = request.app[AUTH_GATE].authorize(token)
        return await handler(request, identity)

    return wrapper


async def _json_body(request: web.Request) -> Any:
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValidationError("Request body must be valid JSON.") from exc


async def _json_object(request: web.Request) -> dict[str, Any]:
    body = await _json_body(request)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object.")
    return body


def _note_id(request: web.Request) -> int:
    raw = request.match_info["id"]
    # plain ASCII digits only; int() would also take "1_0", "+3", " 7"
    if not (raw.isascii() and raw.isdigit()):
        raise NotFoundError("Note not found.")
    return int(raw)


async def handle_index(request: web.Request) -> web.Response:
    return web.Response(text="Welcome to the notekeep API. See /auth and /notes.")


async def handle_signup(request: web.Request) -> web.Response:
    data = await _json_object(request)
    user, token = request.app[AUTH_SERVICE].signup(
        data.get("email"), data.get("password"), data.get("confirmPassword")
    )
    return web.json_response(
        {
            "message": "User registered successfully.",
            "token": token,
            "user": user.public(),
        },
        status=201,
    )


async def handle_signin(request: web.Request) -> web.Response:
    data = await _json_object(request)
    user, token = request.app[AUTH_SERVICE].signin(
        data.get("email"), data.get("password")
    )
    return web.json_response(
        {
            "message": "User logged in successfully.",
            "token": token,
            "user": user.public(),
        }
    )


@authenticated
async def handle_list_notes(request: web.Request, identity: Identity) -> web.Response:
    notes = request.app[NOTE_STORE].list_by_owner(identity.user_id)
    return web.json_response([n.to_record() for n in notes])


@authenticated
async def handle_create_notes(request: web.Request, identity: Identity) -> web.Response:
    body = await _json_body(request)
    items = body if isinstance(body, list) else [body]

    if request.app[CREDENTIALS].find_by_id(identity.user_id) is None:
        raise Forbidden("User no longer exists.")

    created = request.app[NOTE_STORE].create(identity.user_id, items)
    return web.json_response([n.to_record() for n in created], status=201)


@authenticated
async def handle_update_note(request: web.Request, identity: Identity) -> web.Response:
    data = await _json_object(request)
    note = request.app[NOTE_STORE].update(
        identity.user_id, _note_id(request), data.get("title"), data.get("content")
    )
    return web.json_response(note.to_record())


@authenticated
async def handle_delete_note(request: web.Request, identity: Identity) -> web.Response:
    request.app[NOTE_STORE].delete(identity.user_id, _note_id(request))
    return web.Response(status=204)


def create_app(
    users: RecordStorage,
    notes: RecordStorage,
    issuer: TokenIssuer,
    hasher: PasswordHasher,
) -> web.Application:
    """Wire the stores, auth layer and routes into an aiohttp application."""
    credentials = CredentialStore(users)

    app = web.Application(middlewares=[error_middleware])
    app[CREDENTIALS] = credentials
    app[NOTE_STORE] = NoteStore(notes)
    app[AUTH_GATE] = AuthGate(issuer)
    app[AUTH_SERVICE] = AuthService(credentials, hasher, issuer)

    app.router.add_get("/", handle_index)
    app.router.add_post("/auth/signup", handle_signup)
    app.router.add_post("/auth/signin", handle_signin)
    app.router.add_get("/notes", handle_list_notes)
    app.router.add_post("/notes", handle_create_notes)
    app.router.add_put("/notes/{id}", handle_update_note)
    app.router.add_delete("/notes/{id}", handle_delete_note)
    return app


def build_app(settings: Settings) -> web.Application:
    """Production wiring: JSON files under ``settings.data_dir``."""
    return create_app(
        users=JsonFileStorage(settings.users_path),
        notes=JsonFileStorage(settings.notes_path),
        issuer=TokenIssuer(settings.jwt_secret, settings.token_expiry_hours),
        hasher=PasswordHasher(settings.bcrypt_rounds),
    )
