"""Outbound email.

``Mailer`` talks to Resend. ``Notifier`` runs deliveries on a small thread
pool: a failed delivery is logged and dropped, it never reaches the request
that triggered it.
"""
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Dict, Optional, Set

import resend
from markupsafe import escape

from .errors import NotificationError

logger = logging.getLogger(__name__)


def render_message_html(message: str) -> str:
    return f"<p>{escape(message)}</p>"


class Mailer:
    def __init__(self, api_key: str, sender: str):
        self.api_key = (api_key or "").strip()
        self.sender = sender
        if self.api_key:
            resend.api_key = self.api_key

    def send(self, recipient: str, subject: str, html: str):
        if not self.api_key:
            raise NotificationError("Resend API key is not configured.")
        if not recipient:
            raise NotificationError("Missing recipient address.")

        payload: Dict[str, object] = {
            "from": self.sender,
            "to": [recipient],
            "subject": subject,
            "html": html,
        }

        try:
            response = resend.Emails.send(payload)
        except Exception as exc:
            raise NotificationError(str(exc)) from exc

        if not isinstance(response, dict) or not response.get("id"):
            raise NotificationError(str(response))
        return response["id"]


class Notifier:
    def __init__(self, mailer, max_workers: int = 2, log: Optional[logging.Logger] = None):
        self._mailer = mailer
        self._log = log or logger
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="notify"
        )
        self._pending: Set[Future] = set()
        self._lock = threading.Lock()

    def submit(self, recipient: Optional[str], subject: str, message: str) -> Future:
        try:
            future = self._executor.submit(self._deliver, recipient, subject, message)
        except RuntimeError as exc:
            self._log.warning("Email '%s' to %s was not queued: %s", subject, recipient, exc)
            future = Future()
            future.set_result(False)
            return future
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)
        return future

    def _forget(self, future: Future):
        with self._lock:
            self._pending.discard(future)

    def _deliver(self, recipient: Optional[str], subject: str, message: str) -> bool:
        try:
            self._mailer.send(recipient or "", subject, render_message_html(message))
        except Exception as exc:
            self._log.warning("Email '%s' to %s was not sent: %s", subject, recipient, exc)
            return False
        self._log.info("Email '%s' sent to %s", subject, recipient)
        return True

    def flush(self, timeout: Optional[float] = None):
        """Block until every submitted email has been attempted."""
        with self._lock:
            pending = list(self._pending)
        if pending:
            wait(pending, timeout=timeout)

    def close(self):
        self._executor.shutdown(wait=True)
