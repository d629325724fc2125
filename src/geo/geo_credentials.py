"""
Credential acquisition for provider calls.

The auth session itself belongs to an external collaborator; this module
only defines the narrow interface it is consumed through and the gate
every public operation passes before building a request.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import boto3

from ..config.logger_module import log_debug
from .geo_errors import AuthFailure


@dataclass(frozen=True)
class Credentials:
    access_key_id: str
    secret_access_key: str
    session_token: Optional[str] = None

    def __repr__(self) -> str:
        return f"Credentials(access_key_id='...{self.access_key_id[-4:]}')"


@dataclass(frozen=True)
class AuthSession:
    credentials: Optional[Credentials] = None


class AuthSessionProvider(ABC):
    """Source of the current auth session."""

    @abstractmethod
    def fetch_session(self) -> AuthSession:
        """
        Return the current session, refreshing credentials if needed.

        May raise any exception when the session cannot be fetched.
        """
        pass


class Boto3SessionProvider(AuthSessionProvider):
    """Auth session backed by the boto3 credential chain."""

    def __init__(self, profile_name: Optional[str] = None):
        self._session = boto3.Session(profile_name=profile_name)

    def fetch_session(self) -> AuthSession:
        credentials = self._session.get_credentials()
        if credentials is None:
            return AuthSession()

        frozen = credentials.get_frozen_credentials()
        return AuthSession(
            credentials=Credentials(
                access_key_id=frozen.access_key,
                secret_access_key=frozen.secret_key,
                session_token=frozen.token,
            )
        )


class CredentialGate:
    """Ensures credentials exist before any transport request is built."""

    def __init__(self, session_provider: AuthSessionProvider):
        self._session_provider = session_provider

    def ensure(self) -> Credentials:
        """
        Fetch credentials from the session provider.

        Returns:
            The current credentials

        Raises:
            AuthFailure: If the session has no credentials or fetching it failed
        """
        try:
            session = self._session_provider.fetch_session()
        except Exception as e:
            log_debug(f"Ensure credentials error: {e}")
            raise AuthFailure("No credentials") from e

        if session is None or session.credentials is None:
            log_debug("Auth session returned no credentials")
            raise AuthFailure("No credentials")

        log_debug(f"Using credentials {session.credentials!r}")
        return session.credentials
