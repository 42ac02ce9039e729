import argparse
import sys

import uvicorn

from rooclino.local_server_app import create_app, ServerSettings


class LocalServer:
    """Runs the uplink webhook under uvicorn."""

    def __init__(self, settings: ServerSettings) -> None:
        self.settings = settings
        self.app = create_app(settings=self.settings)

    def start(self) -> None:
        uvicorn.run(
            self.app,
            host=self.settings.server_ip,
            port=self.settings.server_port,
            log_level=self.settings.log_level.lower(),
        )


def build_settings(argv=None) -> ServerSettings:
    parser = argparse.ArgumentParser(description="Start the uplink decoding webhook.")
    parser.add_argument("--ip", type=str, default=None, help="IP address to bind the webhook to.")
    parser.add_argument("--port", type=int, default=None, help="Port to run the webhook on.")
    parser.add_argument("--max-depth", type=int, default=None, help="Deepest CBOR nesting accepted.")
    parser.add_argument("--log-level", type=str, default=None, help="Level for the webhook event log.")
    args = parser.parse_args(argv)

    # Flags win over SERVER_IP / SERVER_PORT / ... from the environment or .env
    overrides = {
        "server_ip": args.ip,
        "server_port": args.port,
        "decode_max_depth": args.max_depth,
        "log_level": args.log_level,
    }
    return ServerSettings(**{k: v for k, v in overrides.items() if v is not None})


def main(argv=None):
    server = LocalServer(build_settings(argv))
    server.start()


if __name__ == "__main__":
    sys.exit(main())
