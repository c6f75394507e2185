"""
idform HTTP server entry point.

Usage:
    python run_server.py

    python run_server.py --host 127.0.0.1 --port 9110

    python run_server.py --submit-url http://localhost:8080/post

    # Use environment variables
    IDFORM_PORT=9110 IDFORM_SUBMIT_URL=http://httpbin.org/post python run_server.py
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add src to path for local development
sys.path.insert(0, str(Path(__file__).parent / "src"))

from idform.config import get_config, update_config
from idform.server import run_server


def main(argv=None):
    """Main entry point."""
    config = get_config()

    parser = argparse.ArgumentParser(
        description="idform HTTP server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
  IDFORM_HOST              Host to bind to (default: 0.0.0.0)
  IDFORM_PORT              Port to listen on (default: 9110)
  IDFORM_USERS_URL         Read endpoint for the user table
  IDFORM_SUBMIT_URL        Write endpoint for the identification form
  IDFORM_HTTP_TIMEOUT      Timeout for remote calls in seconds (default: 30)
  IDFORM_NOTIFICATION_MS   How long submission feedback stays visible (default: 3000)
  IDFORM_LOG_LEVEL         Logging level (default: INFO)
        """,
    )

    parser.add_argument(
        "--host",
        default=config.server_host,
        help=f"Host to bind to (default: {config.server_host})",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=config.server_port,
        help=f"Port to listen on (default: {config.server_port})",
    )

    parser.add_argument(
        "--users-url",
        default=config.users_url,
        help="Read endpoint for the user table",
    )

    parser.add_argument(
        "--submit-url",
        default=config.submit_url,
        help="Write endpoint for the identification form",
    )

    args = parser.parse_args(argv)

    # Command-line values win over the environment for this process
    config = update_config(
        server_host=args.host,
        server_port=args.port,
        users_url=args.users_url,
        submit_url=args.submit_url,
    )

    logging.basicConfig(level=config.log_level)

    print("=" * 60)
    print("idform server")
    print("=" * 60)
    print(f"Host: {config.server_host}")
    print(f"Port: {config.server_port}")
    print(f"Users URL: {config.users_url}")
    print(f"Submit URL: {config.submit_url}")
    print("=" * 60)

    try:
        asyncio.run(run_server(host=config.server_host, port=config.server_port))
    except KeyboardInterrupt:
        print("\nServer stopped.")
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
