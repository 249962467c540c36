"""Run the Replayarr API server: python -m replayarr [--host H] [--port P]."""

import argparse

import uvicorn

from replayarr.api import create_app
from replayarr.utilities.logging import setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Replayarr API server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--log-level", default=None, help="Override REPLAYARR_LOG_LEVEL")
    args = parser.parse_args()

    setup_logging(args.log_level)
    uvicorn.run(create_app(), host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
