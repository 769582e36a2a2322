from __future__ import annotations

import json
import logging
from typing import MutableMapping, Optional

from ..core.constants import SESSION_USER_KEY
from .service import AuthService, SessionUser

logger = logging.getLogger(__name__)


class SessionHolder:
    """Single-slot holder for the currently authenticated user.

    `storage` is the client-side persisted mapping (the Flask cookie session in
    the web app, a plain dict in tests). The record is read back from storage
    lazily, once per holder.
    """

    def __init__(self, storage: MutableMapping, auth: AuthService):
        self._storage = storage
        self._auth = auth
        self._user: Optional[SessionUser] = None
        self._loaded = False

    def login(self, unique_id: str, password: str) -> SessionUser:
        user = self._auth.authenticate(unique_id, password)
        self._storage[SESSION_USER_KEY] = json.dumps(user.to_dict())
        self._user = user
        self._loaded = True
        return user

    def logout(self) -> None:
        self._storage.pop(SESSION_USER_KEY, None)
        self._user = None
        self._loaded = True

    def current_user(self) -> Optional[SessionUser]:
        if not self._loaded:
            self._user = self._read_back()
            self._loaded = True
        return self._user

    def is_authenticated(self) -> bool:
        return self.current_user() is not None

    def _read_back(self) -> Optional[SessionUser]:
        raw = self._storage.get(SESSION_USER_KEY)
        if not raw:
            return None
        try:
            return SessionUser.from_dict(json.loads(raw))
        except (TypeError, ValueError, KeyError) as e:
            logger.warning("Discarding unreadable session record: %s", e)
            return None
