"""Windowed game client that shows the connection to the server."""

from __future__ import annotations

import argparse
import sys

import pygame

from .client import NetworkClient
from .protocol import MessageType, deserialize_client_id

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 450
DEFAULT_TITLE = "net-pixeld-client"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 6000
TARGET_FPS = 60

BACKGROUND = (245, 245, 245)
TEXT_COLOUR = (200, 200, 200)
GREETING = "Congrats! You created your first window!"
GREETING_POS = (190, 200)
GREETING_SIZE = 20


class Application:
    """Game window driven by packets from the server."""

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        window_name: str = DEFAULT_TITLE,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
    ) -> None:
        self.width = width
        self.height = height
        self.window_name = window_name

        pygame.display.init()
        pygame.font.init()
        self._surface = pygame.display.set_mode((width, height))
        pygame.display.set_caption(window_name)
        self._clock = pygame.time.Clock()
        self._font = pygame.font.Font(None, GREETING_SIZE)

        self.client_id: int | None = None
        self.world: dict[int, tuple[float, float]] = {}

        self._net = NetworkClient()
        self.connected = self._net.connect(host, port)

    def __enter__(self) -> Application:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def surface(self) -> pygame.Surface:
        """The window's drawing surface."""
        return self._surface

    def _should_close(self) -> bool:
        return any(event.type == pygame.QUIT for event in pygame.event.get())

    def run(self) -> None:
        """Update and draw frames until the window is closed."""
        while not self._should_close():
            self.update()
            self.draw()

    def update(self) -> None:
        """Handle every packet received since the last frame."""
        while (packet := self._net.poll_packet()) is not None:
            if packet.header.type == MessageType.POSITION_UPDATE:
                # Position updates are not yet applied to the world.
                continue
            if packet.header.type == MessageType.ASSIGN_CLIENT_ID:
                self.client_id = deserialize_client_id(packet.payload).client_id
                print(f"CLIENT GOT NEW PLAYER ID: {self.client_id}", flush=True)

    def draw(self) -> None:
        """Render one frame and wait for the frame rate."""
        self._surface.fill(BACKGROUND)
        text = self._font.render(GREETING, True, TEXT_COLOUR)
        self._surface.blit(text, GREETING_POS)
        pygame.display.flip()
        self._clock.tick(TARGET_FPS)

    def close(self) -> None:
        """Disconnect and close the window."""
        self._net.shutdown()
        pygame.quit()


def main(argv: list[str] | None = None) -> int:
    """Open the client window and run until it is closed."""
    parser = argparse.ArgumentParser(description="Pixel game client.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="server address")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="server port")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    args = parser.parse_args(argv)
    with Application(args.width, args.height, DEFAULT_TITLE, args.host, args.port) as app:
        app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())