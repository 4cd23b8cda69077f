"""
Contact Module - Contact form state and submission to the form relay

The relay is a third-party service that forwards the submitted form as an
email. One POST is issued per submit: there is no retry, no backoff and no
de-duplication of rapid repeated submits.
"""

import logging
import threading
from dataclasses import dataclass, asdict
import requests
from .notifications import build_notification, DEFAULT, DESTRUCTIVE

logger = logging.getLogger(__name__)

CONTACT_FIELDS = ('name', 'email', 'message')


@dataclass
class ContactFormData:
    name: str = ''
    email: str = ''
    message: str = ''

    def as_dict(self):
        return asdict(self)

    def is_empty(self):
        return not any(self.as_dict().values())


class ContactFormController:
    """
    Owns the modal's visibility and field values for one visitor.

    Args:
        endpoint (str): form relay URL
        translate: callable resolving notification texts
        timeout (float, optional): request timeout; None waits indefinitely
        http: object with a ``post`` method (the ``requests`` module)
    """

    def __init__(self, endpoint, translate, timeout=None, http=requests):
        self.endpoint = endpoint
        self.translate = translate
        self.timeout = timeout
        self.http = http
        self.data = ContactFormData()
        self.is_open = False
        self._lock = threading.Lock()

    def open(self):
        with self._lock:
            self.data = ContactFormData()
            self.is_open = True

    def close(self):
        with self._lock:
            self.is_open = False
            self.data = ContactFormData()

    def on_field_change(self, field_id, value):
        if field_id not in CONTACT_FIELDS:
            raise KeyError(f"Unknown contact field: {field_id}")
        with self._lock:
            setattr(self.data, field_id, value)

    def on_submit(self, notify):
        """
        Send the form data to the relay.

        Args:
            notify: callable receiving the resulting Notification

        Returns:
            bool: True when the relay answered with a 2xx status
        """
        with self._lock:
            payload = self.data.as_dict()

        try:
            response = self.http.post(
                self.endpoint,
                json=payload,
                headers={'Content-Type': 'application/json'},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Contact relay request failed: {str(e)}")
            return self._fail(notify)

        if not 200 <= response.status_code < 300:
            logger.error(f"Contact relay answered {response.status_code}")
            return self._fail(notify)

        logger.info(f"Contact message relayed for {payload['email']}")
        notify(build_notification(self.translate, 'toast.sent', DEFAULT))
        self.close()
        return True

    def _fail(self, notify):
        # Keep the entered values and make sure they are visible for a retry
        with self._lock:
            self.is_open = True
        notify(build_notification(self.translate, 'toast.error', DESTRUCTIVE))
        return False
