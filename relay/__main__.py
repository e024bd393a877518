"""Run the relay with uvicorn: ``python -m relay``."""

import uvicorn

from .server import app
from .config import HOST, PORT


def main() -> None:
    # No permessage-deflate on the browser socket
    uvicorn.run(app, host=HOST, port=PORT, log_config=None, ws_per_message_deflate=False)


if __name__ == "__main__":
    main()
