#!/usr/bin/env python
"""
Client-credentials token lifecycle for the Spotify Web API.

The manager owns one refresh slot. It is empty when no exchange is running
and holds a shared Future while one is in flight; every caller that finds the
stored credential invalid either starts the exchange (and fills the slot) or
waits on the Future already there. At most one exchange runs at a time and all
waiters see the same credential or the same AuthFailure instance.
"""

from __future__ import annotations

import base64
import logging
import threading
import time
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable, Optional

import requests

from spotcat.core.errors import AuthFailure
from spotcat.models import Credential
from spotcat.observability.metrics import record_auth_exchange, record_auth_failure

logger = logging.getLogger(__name__)


def basic_auth_header(client_id: str, client_secret: str) -> str:
    raw = f"{client_id}:{client_secret}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


class CredentialManager:
    def __init__(
        self,
        client_id: str,
        client_secret: str,
        auth_url: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = 10.0,
        clock: Callable[[], float] = time.time,
    ):
        self._client_id = client_id
        self._client_secret = client_secret
        self._auth_url = auth_url
        self._session = session or requests.Session()
        self._timeout = timeout
        self._clock = clock

        self._lock = threading.Lock()
        self._credential: Optional[Credential] = None
        self._pending: Optional["Future[Credential]"] = None
        self._waiters = 0

    @property
    def credential(self) -> Optional[Credential]:
        """Last credential obtained, valid or not."""
        return self._credential

    @property
    def refresh_in_flight(self) -> bool:
        return self._pending is not None

    @property
    def waiting_callers(self) -> int:
        """Callers currently attached to the in-flight exchange (excluding the one running it)."""
        return self._waiters

    def has_valid_credential(self) -> bool:
        current = self._credential
        return current is not None and current.is_valid(self._clock())

    def get_valid_credential(self) -> Credential:
        """Return a credential valid right now, running or joining an exchange if needed.

        Raises AuthFailure when the exchange this call ran or joined failed. The
        failure is not remembered; the next call starts a fresh exchange.
        """
        with self._lock:
            current = self._credential
            if current is not None and current.is_valid(self._clock()):
                return current
            pending = self._pending
            if pending is None:
                pending = Future()
                self._pending = pending
                leader = True
            else:
                self._waiters += 1
                leader = False

        if not leader:
            logger.debug("Joining in-flight Spotify token exchange.")
            return pending.result()

        try:
            credential = self._exchange()
        except Exception as exc:
            failure = exc if isinstance(exc, AuthFailure) else AuthFailure(f"token exchange failed: {exc}")
            self._release(pending, failure)
            if failure is exc:
                raise
            raise failure from exc
        except BaseException:
            # Interrupted: reopen the slot and answer waiters, then propagate
            self._release(pending, AuthFailure("token exchange interrupted"))
            raise

        with self._lock:
            self._credential = credential
            self._pending = None
            self._waiters = 0
        pending.set_result(credential)
        return credential

    def _release(self, pending: "Future[Credential]", failure: AuthFailure) -> None:
        with self._lock:
            self._pending = None
            self._waiters = 0
        pending.set_exception(failure)

    def invalidate(self, stale: Optional[Credential] = None) -> None:
        """Forget the stored credential so the next caller refreshes it.

        With ``stale`` given, only that exact credential is dropped; one that a
        concurrent caller already refreshed is left alone.
        """
        with self._lock:
            if stale is None or self._credential is stale:
                self._credential = None

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until a valid credential exists; False if ``timeout`` runs out first.

        Waits on the exchange in flight, or runs one when none is. Raises the
        exchange's AuthFailure as soon as it fails.
        """
        with self._lock:
            current = self._credential
            if current is not None and current.is_valid(self._clock()):
                return True
            pending = self._pending

        if pending is None:
            self.get_valid_credential()
            return True
        try:
            pending.result(timeout)
        except FutureTimeoutError:
            return False
        return True

    def prefetch(self) -> threading.Thread:
        """Start the first exchange in the background so callers find it in flight."""
        thread = threading.Thread(target=self._prefetch, name="spotify-token-prefetch", daemon=True)
        thread.start()
        return thread

    def _prefetch(self) -> None:
        try:
            self.get_valid_credential()
        except AuthFailure as exc:
            logger.warning("Initial Spotify token exchange failed: %s", exc)

    def _exchange(self) -> Credential:
        headers = {
            "Authorization": basic_auth_header(self._client_id, self._client_secret),
            "Content-Type": "application/x-www-form-urlencoded",
        }
        logger.info("Requesting Spotify access token.")
        record_auth_exchange()
        try:
            response = self._session.post(
                self._auth_url,
                data={"grant_type": "client_credentials"},
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            record_auth_failure()
            logger.error("Spotify token request failed: %s", exc)
            raise AuthFailure(f"token request failed: {exc}") from exc

        if response.status_code != 200:
            record_auth_failure()
            logger.error("Spotify token endpoint answered HTTP %s.", response.status_code)
            raise AuthFailure(
                f"token endpoint answered HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
            token = payload["access_token"]
            expires_in = int(payload["expires_in"])
        except (ValueError, KeyError, TypeError) as exc:
            record_auth_failure()
            logger.error("Malformed Spotify token response: %s", exc)
            raise AuthFailure(f"malformed token response: {exc}") from exc
        if not isinstance(token, str) or not token:
            record_auth_failure()
            raise AuthFailure("token endpoint returned an empty access_token")
        if expires_in <= 0:
            record_auth_failure()
            logger.error("Spotify token response has non-positive expires_in: %s", expires_in)
            raise AuthFailure(f"non-positive expires_in: {expires_in}")

        credential = Credential(token=token, expires_at=self._clock() + expires_in)
        logger.info("Spotify access token obtained; expires in %s seconds.", expires_in)
        return credential


__all__ = ["CredentialManager", "basic_auth_header"]
