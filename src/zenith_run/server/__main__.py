"""
Zenith Component Runtime HTTP Service

Starts the FastAPI server for the component runtime API.

Usage:
    zenith-server                       # Start on the configured port (default 9848)
    zenith-server --port 8080           # Start on custom port
    python -m zenith_run.server --reload
"""

import argparse
import sys
from pathlib import Path

from ..config import load_config, validate_config_dict


def main():
    parser = argparse.ArgumentParser(
        description="Zenith Component Runtime HTTP Service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", type=Path, help="Config file path")
    parser.add_argument("--host", help="Host to bind to (default: server.host)")
    parser.add_argument("--port", type=int, help="Port to listen on (default: server.port)")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )

    args = parser.parse_args()

    config = load_config(args.config)
    errors = validate_config_dict(config)
    if errors:
        for error in errors:
            print(f"Config error: {error}", file=sys.stderr)
        sys.exit(1)

    host = args.host or config["server"]["host"]
    port = args.port or config["server"]["port"]

    import uvicorn

    print(f"Starting Zenith Component Runtime on http://{host}:{port}")
    print(f"API docs: http://{host}:{port}/docs")
    print()

    # Reload needs an import string, so the app then reads the default config file
    if args.reload:
        app = "zenith_run.server.app:create_app"
    else:
        from .app import create_app
        app = create_app(config)

    uvicorn.run(
        app,
        factory=args.reload,
        host=host,
        port=port,
        reload=args.reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
