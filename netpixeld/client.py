"""TCP client that receives framed packets on a background thread."""

from __future__ import annotations

import queue
import socket
import sys
import threading

from .protocol import HEADER_SIZE, LENGTH_PREFIX_SIZE, Packet, decode_header, encode_packet


def _recv_exactly(sock: socket.socket, size: int) -> bytes | None:
    """Read exactly ``size`` bytes, or return None if the stream ends or fails."""
    chunks = []
    remaining = size
    while remaining > 0:
        try:
            chunk = sock.recv(remaining)
        except OSError:
            return None
        if not chunk:
            return None
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


class NetworkClient:
    """Connection to a server; incoming packets are queued for polling."""

    def __init__(self) -> None:
        self._sock: socket.socket | None = None
        self._send_lock = threading.Lock()
        self._received: queue.SimpleQueue[Packet] = queue.SimpleQueue()
        self._running = threading.Event()
        self._thread: threading.Thread | None = None

    def __enter__(self) -> NetworkClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()

    def connect(self, host: str, port: int) -> bool:
        """Connect and start receiving; return False if the connection failed."""
        try:
            sock = socket.create_connection((host, port))
        except OSError as exc:
            print(f"[NetworkClient.connect][ERROR]: {exc}", file=sys.stderr)
            return False
        self._sock = sock
        self._running.set()
        self._thread = threading.Thread(
            target=self._recv_loop, args=(sock,), daemon=True
        )
        self._thread.start()
        return True

    def _recv_loop(self, sock: socket.socket) -> None:
        while self._running.is_set():
            if _recv_exactly(sock, LENGTH_PREFIX_SIZE) is None:
                break
            header_bytes = _recv_exactly(sock, HEADER_SIZE)
            if header_bytes is None:
                break
            header = decode_header(header_bytes)
            payload = b""
            if header.payload_length > 0:
                payload = _recv_exactly(sock, header.payload_length)
                if payload is None:
                    break
            self._received.put(Packet(header, payload))
        self._running.clear()

    def poll_packet(self) -> Packet | None:
        """Return the oldest received packet, or None if none is waiting."""
        try:
            return self._received.get_nowait()
        except queue.Empty:
            return None

    def send_packet(self, packet: Packet) -> None:
        """Send one framed packet to the server."""
        if self._sock is None:
            raise ConnectionError("not connected")
        data = encode_packet(packet)
        with self._send_lock:
            self._sock.sendall(data)

    def shutdown(self) -> None:
        """Close the connection and stop the receiving thread."""
        self._running.clear()
        sock, self._sock = self._sock, None
        if sock is not None:
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            sock.close()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=1.0)