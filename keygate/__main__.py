"""keygate entry point: start aiohttp server."""

import argparse
import logging
import sys
from pathlib import Path

from keygate.config import ConfigError, load_config, log_level
from keygate.server import create_app


def main() -> None:
    from aiohttp import web

    parser = argparse.ArgumentParser(description="ApiKey header extraction service")
    parser.add_argument("--config", type=Path, help="YAML config file")
    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except (ConfigError, OSError) as exc:
        print(f"keygate: {exc}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=log_level(config),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    app = create_app(config)
    web.run_app(app, host=config["server"]["host"], port=config["server"]["port"])


if __name__ == "__main__":
    main()
