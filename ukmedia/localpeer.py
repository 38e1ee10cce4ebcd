"""Local-socket messaging between instances of one application for one user."""

from __future__ import annotations

import errno
import logging
import os
import re
import socket
import struct
import sys
import tempfile
import time
from collections.abc import Callable

from ukmedia.lockedfile import LockedFile, LockMode

_log = logging.getLogger(__name__)

ACK = b"ack"
_HEADER = struct.Struct(">I")
_RETRY_DELAY = 0.25
_READ_TIMEOUT = 2.0
_DISCONNECT_TIMEOUT = 1.0


def checksum16(data: bytes) -> int:
    """Return the 16-bit ISO 3309 (X.25) checksum of the data."""
    crc = 0xFFFF
    for byte in data:
        crc ^= byte
        for _ in range(8):
            crc = (crc >> 1) ^ 0x8408 if crc & 1 else crc >> 1
    return ~crc & 0xFFFF


def _resolve_app_id(app_id: str) -> str:
    if app_id:
        return app_id
    program = sys.argv[0] if sys.argv and sys.argv[0] else sys.executable
    return os.path.abspath(program)


def make_socket_name(app_id: str, uid: int) -> str:
    """Build the socket name shared by all instances with this id and user."""
    prefix = app_id
    if not app_id:
        app_id = _resolve_app_id(app_id)
        prefix = app_id.rsplit("/", 1)[-1]
    prefix = re.sub(r"[^a-zA-Z]", "", prefix)[:6]
    id_num = checksum16(app_id.encode("utf-8"))
    return f"qtsingleapp-{prefix}-{id_num:x}-{uid:x}"


def _recv_exact(conn: socket.socket, size: int) -> bytes | None:
    """Read exactly size bytes, or return None if the peer disconnects first."""
    chunks = bytearray()
    while len(chunks) < size:
        chunk = conn.recv(size - len(chunks))
        if not chunk:
            return None
        chunks += chunk
    return bytes(chunks)


class LocalPeer:
    """One instance's end of the single-instance protocol.

    The first instance to take the write lock on the shared lock file becomes
    the server and listens on a Unix socket; later instances are clients and
    send it length-prefixed UTF-8 messages, each answered with "ack".
    """

    def __init__(self, app_id: str = "", temp_dir: str | os.PathLike[str] | None = None) -> None:
        self._id = _resolve_app_id(app_id)
        self._socket_name = make_socket_name(app_id, os.getuid())
        directory = os.path.abspath(os.fspath(temp_dir) if temp_dir is not None else tempfile.gettempdir())
        self.socket_path = os.path.join(directory, self._socket_name)
        self.lock_path = self.socket_path + "-lockfile"
        self._lock_file = LockedFile(self.lock_path)
        self._lock_file.open("r+")
        self._server: socket.socket | None = None
        self._callbacks: list[Callable[[str], object]] = []

    def application_id(self) -> str:
        return self._id

    def socket_name(self) -> str:
        return self._socket_name

    def connect(self, callback: Callable[[str], object]) -> None:
        """Call callback with every message this instance receives."""
        self._callbacks.append(callback)

    def _listen(self) -> socket.socket | None:
        server = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            try:
                server.bind(self.socket_path)
            except OSError as exc:
                if exc.errno != errno.EADDRINUSE:
                    raise
                os.remove(self.socket_path)
                server.bind(self.socket_path)
            server.listen()
        except OSError as exc:
            server.close()
            _log.warning("listen on local socket failed, %s", exc)
            return None
        return server

    def is_client(self) -> bool:
        """Tell whether another instance already holds the server role.

        If none does, this instance takes the role and starts listening.
        """
        if self._lock_file.is_locked():
            return False
        if not self._lock_file.lock(LockMode.WRITE_LOCK, block=False):
            return True
        self._server = self._listen()
        return False

    def send_message(self, message: str, timeout: int = 5000) -> bool:
        """Send a message to the running instance and wait for its ack.

        The timeout is in milliseconds. Returns False if this instance is
        itself the running one, or if the message was not acknowledged.
        """
        if not self.is_client():
            return False

        conn: socket.socket | None = None
        for attempt in range(2):
            candidate = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            candidate.settimeout(timeout / 2000)
            try:
                candidate.connect(self.socket_path)
            except OSError:
                candidate.close()
                if attempt == 0:
                    time.sleep(_RETRY_DELAY)
                continue
            conn = candidate
            break
        if conn is None:
            return False

        payload = message.encode("utf-8")
        with conn:
            conn.settimeout(timeout / 1000)
            try:
                conn.sendall(_HEADER.pack(len(payload)) + payload)
                reply = _recv_exact(conn, len(ACK))
            except OSError:
                return False
        return reply == ACK

    def receive_connection(self, timeout: int | None = None) -> str | None:
        """Accept one pending connection and read its message.

        Waits up to timeout milliseconds for a connection, or without limit
        if timeout is None. Returns the message after notifying the connected
        callbacks, or None if nothing arrived or reception failed.
        """
        if self._server is None:
            return None
        self._server.settimeout(None if timeout is None else timeout / 1000)
        try:
            conn, _ = self._server.accept()
        except OSError:
            return None

        with conn:
            conn.settimeout(_READ_TIMEOUT)
            try:
                header = _recv_exact(conn, _HEADER.size)
                if header is None:
                    _log.warning("Peer disconnected")
                    return None
                (length,) = _HEADER.unpack(header)
                payload = _recv_exact(conn, length)
            except OSError as exc:
                _log.warning("Message reception failed %s", exc)
                return None
            if payload is None:
                _log.warning("Message reception failed: peer disconnected")
                return None
            message = payload.decode("utf-8", errors="replace")
            try:
                conn.sendall(ACK)
                conn.settimeout(_DISCONNECT_TIMEOUT)
                while conn.recv(1024):
                    pass
            except OSError:
                pass

        for callback in list(self._callbacks):
            callback(message)
        return message

    def close(self) -> None:
        """Stop listening, remove the socket and release the lock."""
        if self._server is not None:
            self._server.close()
            self._server = None
            try:
                os.remove(self.socket_path)
            except FileNotFoundError:
                pass
        self._lock_file.close()