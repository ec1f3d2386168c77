"""Server entrypoint: starts uvicorn with host and port from the environment."""
import os

import uvicorn

# Import the app object directly so frozen bundles do not depend on
# uvicorn's string-based import.
from finledger.main import app


def main() -> None:
    host = os.environ.get("FINLEDGER_HOST", "127.0.0.1")
    port = int(os.environ.get("FINLEDGER_PORT", "8001"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
