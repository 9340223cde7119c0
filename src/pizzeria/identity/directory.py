"""ClientDirectory: client registration, credential check and sessions.

``login`` hands back an explicit ``Session`` value that the caller passes to
every client-facing operation; the directory only remembers which sessions are
currently open. A client holds at most one open session: logging in again
replaces the previous one.
"""

import re
import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import uuid4

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from pizzeria.config import get_settings
from pizzeria.identity.client import (
    MAX_EMAIL_LENGTH,
    MAX_PASSWORD_LENGTH,
    Client,
    PersonalInfo,
    client_key,
)
from pizzeria.shared.errors import RegistrationError, SessionError
from pizzeria.shared.outcome import Outcome
from pizzeria.utils.logging import get_logger

logger = get_logger(__name__)

_EMAIL_SHAPE = re.compile(r".+@.+\..+")

_PERSONAL_FIELDS = ("last_name", "first_name", "address", "age")


@dataclass(frozen=True)
class Session:
    token: str
    client_key: str
    opened_at: datetime


def _is_blank(value):
    return value is None or not isinstance(value, str) or not value.strip()


def _personal_info_complete(info) -> bool:
    if info is None:
        return False
    values = (
        {field: info.get(field) for field in _PERSONAL_FIELDS}
        if isinstance(info, dict)
        else {field: getattr(info, field, None) for field in _PERSONAL_FIELDS}
    )
    if any(_is_blank(values[field]) for field in ("last_name", "first_name", "address")):
        return False
    age = values["age"]
    return isinstance(age, int) and not isinstance(age, bool) and age > 0


class ClientDirectory:
    def __init__(self):
        self._lock = threading.RLock()
        self._sessions: dict[str, Session] = {}

    # -------------------------------------------------------------------
    # Registry
    # -------------------------------------------------------------------
    def find(self, email) -> Client | None:
        if _is_blank(email):
            return None
        try:
            return current_domain.repository_for(Client).get(client_key(email))
        except ObjectNotFoundError:
            return None

    def clients(self) -> list[Client]:
        items = current_domain.repository_for(Client)._dao.query.all().items
        return sorted(items, key=lambda c: (c.registered_at, c.key))

    def register(self, email, password, personal_info) -> Outcome:
        """Register a client; each rejection has its own error kind, checked
        in order: missing fields, password length, malformed email, duplicate."""
        if _is_blank(email) or _is_blank(password) or not _personal_info_complete(personal_info):
            return self._reject(RegistrationError.MISSING_FIELDS, email=email)
        if len(password) < get_settings().min_password_length:
            return self._reject(RegistrationError.PASSWORD_TOO_SHORT, email=email)
        if len(password) > MAX_PASSWORD_LENGTH:
            return self._reject(RegistrationError.PASSWORD_TOO_LONG, email=email)
        if len(email.strip()) > MAX_EMAIL_LENGTH or not _EMAIL_SHAPE.fullmatch(email.strip()):
            return self._reject(RegistrationError.INVALID_EMAIL, email=email)

        if isinstance(personal_info, dict):
            try:
                personal_info = PersonalInfo(**{field: personal_info[field] for field in _PERSONAL_FIELDS})
            except ValidationError:
                return self._reject(RegistrationError.MISSING_FIELDS, email=email)

        with self._lock:
            if self.find(email) is not None:
                return self._reject(RegistrationError.DUPLICATE_EMAIL, email=email)

            client = Client.register(email=email, password=password, personal_info=personal_info)
            current_domain.repository_for(Client).add(client)

        logger.info("Client registered", client=client.key)
        return Outcome.success(client)

    # -------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------
    def login(self, email, password) -> Outcome:
        client = self.find(email)
        if client is None or not client.check_password(password):
            return self._reject(SessionError.INVALID_CREDENTIALS, email=email)

        session = Session(token=uuid4().hex, client_key=client.key, opened_at=datetime.now(UTC))
        with self._lock:
            for token in [t for t, s in self._sessions.items() if s.client_key == client.key]:
                del self._sessions[token]
            self._sessions[session.token] = session

        logger.info("Client logged in", client=client.key)
        return Outcome.success(session)

    def logout(self, session) -> Outcome:
        with self._lock:
            if not self.is_active(session):
                return self._reject(SessionError.NO_SESSION)
            del self._sessions[session.token]

        logger.info("Client logged out", client=session.client_key)
        return Outcome.success()

    def is_active(self, session) -> bool:
        return isinstance(session, Session) and self._sessions.get(session.token) == session

    def client_for(self, session) -> Client | None:
        """The client behind an open session, or None when it is not open."""
        if not self.is_active(session):
            return None
        return self.find(session.client_key)

    def active_sessions(self) -> list[Session]:
        return sorted(self._sessions.values(), key=lambda s: s.opened_at)

    def close_all_sessions(self):
        with self._lock:
            self._sessions.clear()

    @staticmethod
    def _reject(error, **details):
        logger.debug("Directory operation rejected", error=error.value, **details)
        return Outcome.failure(error)
