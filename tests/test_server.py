import socket

import pytest

from netpixeld.protocol import (
    HEADER_SIZE,
    MessageType,
    Packet,
    PacketHeader,
    decode_header,
    deserialize_client_id,
    encode_packet,
)
from netpixeld.server import Server, Session


@pytest.fixture
def server():
    srv = Server(0, "127.0.0.1")
    yield srv
    srv.close()


def _recv_exactly(sock, size):
    data = b""
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            break
        data += chunk
    return data


def _read_frame(sock):
    length = int.from_bytes(_recv_exactly(sock, 4), "big")
    body = _recv_exactly(sock, length)
    header = decode_header(body)
    return header, body[HEADER_SIZE:]


def test_accept_sends_assign_client_id(server):
    with socket.create_connection(("127.0.0.1", server.port)) as conn:
        session = server.accept()
        header, payload = _read_frame(conn)
    assert session.client_id == 0
    assert header.type is MessageType.ASSIGN_CLIENT_ID
    assert header.version == 1
    assert header.sequence == 0
    assert header.payload_length == len(payload)
    assert deserialize_client_id(payload).client_id == 0


def test_client_ids_increase(server):
    ids = []
    conns = []
    try:
        for _ in range(3):
            conn = socket.create_connection(("127.0.0.1", server.port))
            conns.append(conn)
            server.accept()
            _, payload = _read_frame(conn)
            ids.append(deserialize_client_id(payload).client_id)
    finally:
        for conn in conns:
            conn.close()
    assert ids == [0, 1, 2]
    assert [s.client_id for s in server.sessions] == [0, 1, 2]


def test_accept_reports_new_session(server, capsys):
    with socket.create_connection(("127.0.0.1", server.port)):
        server.accept()
    out = capsys.readouterr().out
    assert "Created new session ID: 0" in out
    assert "New session ID: 0 registered!" in out


def test_close_closes_sessions(server):
    with socket.create_connection(("127.0.0.1", server.port)):
        session = server.accept()
        server.close()
    assert session.closed is True
    assert server.sessions == []


def test_session_send_packet():
    left, right = socket.socketpair()
    with right:
        session = Session(left, 5)
        packet = Packet(PacketHeader(1, MessageType.CUSTOM_EVENT, 2, 2), b"hi")
        expected = encode_packet(packet)
        session.send_packet(packet)
        data = _recv_exactly(right, len(expected))
        session.close()
    assert data == expected


def test_session_close_is_idempotent(capsys):
    left, right = socket.socketpair()
    with right:
        session = Session(left, 7)
        session.close()
        session.close()
    out = capsys.readouterr().out
    assert out.count("Deleted session: 7") == 1
    assert session.closed is True


def test_session_send_after_close_reports_error(capsys):
    left, right = socket.socketpair()
    with right:
        session = Session(left, 1)
        session.close()
        session.send_packet(Packet(PacketHeader(1, MessageType.INPUT, 0, 0)))
    assert "[Error]" in capsys.readouterr().err
    assert session.closed is True