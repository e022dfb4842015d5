"""Blocking TCP server that hands every new client an identifier."""

from __future__ import annotations

import argparse
import socket
import sys
import threading

from .protocol import (
    PROTOCOL_VERSION,
    AssignClientIdPayload,
    MessageType,
    Packet,
    PacketHeader,
    encode_packet,
)

DEFAULT_PORT = 6000


class Session:
    """One connected client."""

    def __init__(self, sock: socket.socket, client_id: int) -> None:
        self._sock = sock
        self.client_id = client_id
        self._send_lock = threading.Lock()
        self._deleted = False
        print(f"Created new session ID: {client_id}", flush=True)

    @property
    def closed(self) -> bool:
        """True once the session's socket has been closed."""
        return self._sock.fileno() == -1

    def send_packet(self, packet: Packet) -> None:
        """Send a framed packet; on failure report it and close the socket."""
        data = encode_packet(packet)
        with self._send_lock:
            try:
                self._sock.sendall(data)
            except OSError as exc:
                print(f"[Session.send_packet][Error]: {exc}", file=sys.stderr)
                self._sock.close()

    def close(self) -> None:
        """Shut the connection down; further calls do nothing."""
        if self._deleted:
            return
        self._deleted = True
        print(f"Deleted session: {self.client_id}", flush=True)
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self._sock.close()


class Server:
    """Accepts clients and sends each an assign-client-id packet."""

    def __init__(self, port: int = DEFAULT_PORT, host: str = "0.0.0.0") -> None:
        self._acceptor = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self._acceptor.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            self._acceptor.bind((host, port))
            self._acceptor.listen()
        except OSError:
            self._acceptor.close()
            raise
        self._next_client_id = 0
        self.sessions: list[Session] = []

    def __enter__(self) -> Server:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def port(self) -> int:
        """The port the server listens on."""
        return self._acceptor.getsockname()[1]

    def accept(self) -> Session:
        """Wait for one client, register it and send it its identifier."""
        sock, _ = self._acceptor.accept()
        return self._on_new_connection(sock)

    def _on_new_connection(self, sock: socket.socket) -> Session:
        client_id = self._next_client_id
        self._next_client_id = (client_id + 1) & 0xFF
        session = Session(sock, client_id)
        self.sessions.append(session)

        payload = AssignClientIdPayload(client_id).to_bytes()
        header = PacketHeader(
            PROTOCOL_VERSION, MessageType.ASSIGN_CLIENT_ID, 0, len(payload)
        )
        session.send_packet(Packet(header, payload))

        print(f"New session ID: {client_id} registered!", flush=True)
        return session

    def run(self) -> None:
        """Accept clients forever."""
        print(f"Server listening on port {self.port}...", flush=True)
        while True:
            self.accept()

    def close(self) -> None:
        """Close every session and stop listening."""
        for session in self.sessions:
            session.close()
        self.sessions.clear()
        self._acceptor.close()


def main(argv: list[str] | None = None) -> int:
    """Run the server until interrupted."""
    parser = argparse.ArgumentParser(description="Pixel game server.")
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument(
        "--port", type=int, default=DEFAULT_PORT, help="port to listen on"
    )
    args = parser.parse_args(argv)
    with Server(args.port, args.host) as server:
        try:
            server.run()
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())