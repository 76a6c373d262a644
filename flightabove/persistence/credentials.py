"""Credential stores for the live flight provider API token.

Encryption at rest is the desktop shell's business; the core only needs to
know whether a token exists and what it is.
"""

from __future__ import annotations

import os
from typing import Protocol

FR24_TOKEN_ENV = "FR24_API_TOKEN"


class CredentialStore(Protocol):
    def has_credential(self) -> bool: ...

    def get_credential(self) -> str | None: ...


class EnvCredentialStore:
    """Read the token from the environment (``.env`` is loaded by the app)."""

    def __init__(self, env_var: str = FR24_TOKEN_ENV):
        self.env_var = env_var

    def get_credential(self) -> str | None:
        token = os.environ.get(self.env_var, "").strip()
        return token or None

    def has_credential(self) -> bool:
        return self.get_credential() is not None


class MemoryCredentialStore:
    """Process-local token, settable at runtime (API, tests)."""

    def __init__(self, token: str | None = None):
        self._token = token.strip() if token else None

    def get_credential(self) -> str | None:
        return self._token or None

    def has_credential(self) -> bool:
        return bool(self._token)

    def set_credential(self, token: str) -> None:
        self._token = token.strip() or None

    def clear_credential(self) -> None:
        self._token = None
