"""Single-instance detection and messaging for applications without a GUI."""

from __future__ import annotations

import os
from collections.abc import Callable

from ukmedia.localpeer import LocalPeer


class SingleCoreApplication:
    """Lets one instance of an application run and receive messages from later ones.

    Two processes with the same application id, run by the same user, are
    instances of the same application.
    """

    def __init__(self, app_id: str = "", temp_dir: str | os.PathLike[str] | None = None) -> None:
        self._peer = LocalPeer(app_id, temp_dir)

    def is_running(self) -> bool:
        """Tell whether another instance is already running.

        If none is, this instance becomes the running one.
        """
        return self._peer.is_client()

    def send_message(self, message: str, timeout: int = 5000) -> bool:
        """Send a message to the running instance; timeout is in milliseconds."""
        return self._peer.send_message(message, timeout)

    def id(self) -> str:
        """The application identifier."""
        return self._peer.application_id()

    def connect(self, callback: Callable[[str], object]) -> None:
        """Call callback with every message received from other instances."""
        self._peer.connect(callback)

    def process_events(self, timeout: int | None = None) -> str | None:
        """Wait up to timeout milliseconds for one message and deliver it."""
        return self._peer.receive_connection(timeout)

    def close(self) -> None:
        """Give up the running role and release resources."""
        self._peer.close()