from __future__ import annotations

import itertools
import logging
import threading
from typing import Dict, Optional

from .contracts import PasswordHasherPort, Role, User
from .errors import DuplicateAccountError

log = logging.getLogger("credentialservice.store")


class UserStorePort:
    """Port interface for user persistence. Adapters own durability and uniqueness."""

    def find_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def exists_by_email(self, email: str) -> bool:
        raise NotImplementedError

    def save_and_flush(self, user: User) -> User:
        """Persist and make the write visible before returning the stored entity."""
        raise NotImplementedError

    def save(self, user: User) -> User:
        raise NotImplementedError


class InMemoryUserStore(UserStorePort):
    """Thread-safe in-memory store keyed by email.

    Inserting a new user (id is None) whose email is already taken raises
    DuplicateAccountError under the lock, so check-then-insert races cannot
    produce two accounts for one email.
    """

    def __init__(self) -> None:
        self._users: Dict[str, User] = {}
        self._ids = itertools.count(1)
        self._lock = threading.RLock()

    def find_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return self._users.get(email)

    def exists_by_email(self, email: str) -> bool:
        with self._lock:
            return email in self._users

    def save_and_flush(self, user: User) -> User:
        # Nothing is buffered in memory; save is already visible on return.
        return self.save(user)

    def save(self, user: User) -> User:
        with self._lock:
            existing = self._users.get(user.email)
            if user.id is None:
                if existing is not None:
                    raise DuplicateAccountError(details={"email": user.email})
                user = user.with_id(next(self._ids))
            elif existing is not None and existing.id != user.id:
                raise DuplicateAccountError(details={"email": user.email})
            self._users[user.email] = user
            log.debug("user_saved user_id=%s", user.id)
            return user

    def add_user(
        self,
        *,
        full_name: str,
        email: str,
        password: str,
        hasher: PasswordHasherPort,
        role: Role = Role.STUDENT,
    ) -> User:
        """Seed helper for tests and local runs."""
        return self.save(User(full_name=full_name, email=email, password_hash=hasher.encode(password), role=role))

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)
