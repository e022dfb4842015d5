# netpixeld

A small networked pixel game. The server listens over TCP and gives each
client that connects its own id. The client opens a pygame window,
connects to the server and prints the id it was given.

## Installation

```
pip install .
```

Tests need the `test` extra:

```
pip install ".[test]"
pytest
```

## Running

Start the server. By default it listens on port 6000 on every IPv4
interface (`0.0.0.0`) and blocks until you stop it with Ctrl+C:

```
net-pixeld-server
net-pixeld-server --host 127.0.0.1 --port 7000
```

In another terminal, start a client. By default it connects to
`127.0.0.1:6000` and opens an 800×450 window titled `net-pixeld-client`:

```
net-pixeld-client
net-pixeld-client --host 127.0.0.1 --port 7000 --width 1024 --height 600
```

Each new connection gets the next id, counting up from 0 and wrapping
after 255. The server logs each new session. The client prints
`CLIENT GOT NEW PLAYER ID: <id>` when the id arrives. If the client
cannot connect, it reports the error on stderr and keeps the window open.

## Wire format

Every message is a frame laid out as follows:

```
[length: u32][header: 8 bytes][payload]
```

`length` is big-endian and counts the header and the payload together.
The header holds these fields, packed with no padding:

| field          | type | byte order |
|----------------|------|------------|
| version        | u8   | –          |
| type           | u8   | –          |
| sequence       | u16  | big-endian |
| payload length | u32  | big-endian |

The server sends version `1`. Message types, from
`netpixeld.protocol.MessageType`:

- `ASSIGN_CLIENT_ID` (0): a single byte with the client's id
- `INPUT` (1)
- `POSITION_UPDATE` (2)
- `CUSTOM_EVENT` (3)

A header whose type byte is not one of these is decoded with the plain
integer as its `type`.

## Using the library

`netpixeld.protocol` holds the wire format:

- `PacketHeader(version, type, sequence=0, payload_length=0)` and its
  `pack()` method, which returns the eight header bytes.
- `Packet(header, payload=b"")`.
- `encode_packet(packet)` builds a complete frame.
- `decode_header(data)` reads a header from the first eight bytes.
- `AssignClientIdPayload(client_id)` with `to_bytes()`, and
  `deserialize_client_id(payload)` to read one back.
- `PositionPayload(id, x, y)` with `to_bytes()` and `from_bytes(data)`,
  using the machine's native layout.
- `ProtocolError`, a `ValueError` raised for short input or out-of-range
  fields.

`netpixeld.client.NetworkClient` receives frames on a background thread
and queues them:

```python
from netpixeld.client import NetworkClient
from netpixeld.protocol import MessageType, deserialize_client_id

with NetworkClient() as client:
    if client.connect("127.0.0.1", 6000):  # False if the connection failed
        packet = client.poll_packet()  # None when nothing has arrived yet
        if packet is not None and packet.header.type == MessageType.ASSIGN_CLIENT_ID:
            print(deserialize_client_id(packet.payload).client_id)
```

`send_packet(packet)` sends a frame and raises `ConnectionError` when not
connected; `shutdown()` closes the connection.

`netpixeld.server.Server(port=6000, host="0.0.0.0")` listens as soon as
it is created. `accept()` waits for one client, registers it as a
`Session` and sends it its id; `run()` does so forever; `close()` closes
every session and the listening socket. The `port` property gives the
port actually bound, so `Server(0)` picks a free one. Both `Server` and
`NetworkClient` are context managers.

`netpixeld.app.Application` is the windowed client: `run()` loops over
`update()` (handle queued packets) and `draw()` (render one frame at 60
frames per second) until the window is closed.

## What it does not do yet

- The server only sends each client its id. It never reads from clients
  and relays nothing between them.
- The client never sends packets, and ignores `POSITION_UPDATE` packets;
  the window shows a fixed greeting, not the players.
- `INPUT` and `CUSTOM_EVENT` have no payload format.