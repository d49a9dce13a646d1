"""CLI entry point for the OAuth client demo.

Loads .env, validates configuration, and serves the demo on
http://localhost:PORT. Exits with status 1 on invalid configuration.
"""
import argparse
import logging
import sys
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from config import ConfigError, load_config
from logging_config import setup_logging

VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def load_environment(env_file: str = ".env") -> None:
    """Load variables from env_file if it exists; real environment wins."""
    path = Path(env_file)
    if path.exists():
        load_dotenv(path)


def _settings_or_exit(args):
    """Validate configuration, applying command-line overrides."""
    overrides = {}
    if args.port is not None:
        overrides["port"] = args.port
    if args.no_browser:
        overrides["open_browser"] = False
    if args.no_pkce:
        overrides["enable_pkce"] = False

    try:
        return load_config(**overrides)
    except ConfigError as e:
        setup_logging()
        logger.error("[STARTUP] Environment validation failed:")
        for error in e.errors:
            logger.error(f"[STARTUP]   {error}")
        sys.exit(1)


# ============== CLI Commands ==============

def cmd_start(args):
    """Serve the demo until interrupted."""
    from main import create_app

    settings = _settings_or_exit(args)
    setup_logging(settings.log_level, settings.log_format)

    logger.info(f"[STARTUP] Provider: {settings.provider_url}")
    logger.info(f"[STARTUP] Redirect URI: {settings.redirect_uri}")

    app = create_app(settings)
    uvicorn.run(app, host="127.0.0.1", port=settings.port, log_level=settings.log_level.lower())


def cmd_check(args):
    """Validate configuration and print the authorization URL without serving."""
    from oauth_client.authorize import build_authorization_url
    from oauth_client.session import Session

    settings = _settings_or_exit(args)
    session = Session(pkce=settings.enable_pkce)

    print("\n" + "=" * 60)
    print("  OAuth Client Demo - Configuration OK")
    print("=" * 60)
    print(f"  Provider:     {settings.provider_url}")
    print(f"  Client ID:    {settings.client_id}")
    print(f"  Redirect URI: {settings.redirect_uri}")
    print(f"  Scope:        {settings.scope}")
    print(f"  PKCE:         {'enabled' if settings.enable_pkce else 'disabled'}")
    print()
    print("  Sample authorization URL (state differs on each run):")
    print(f"    {build_authorization_url(session, settings)}")
    print("=" * 60 + "\n")


def cmd_version(args):
    print(f"oauth-client-demo v{VERSION}")


# ============== Main Entry Point ==============

def main(argv=None):
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        prog="oauth-client-demo",
        description="OAuth 2.0 authorization code flow demo client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  start     Serve the demo (default)
  check     Validate configuration and show the authorization URL
  version   Show version

Required environment (or .env):
  FAPI_URL, CLIENT_ID, CLIENT_SECRET

Examples:
  oauth-client-demo
  oauth-client-demo start --port 4000 --no-browser
  oauth-client-demo check
"""
    )

    parser.add_argument(
        "command",
        nargs="?",
        default="start",
        choices=["start", "check", "version"],
        help="Command to run (default: start)"
    )
    parser.add_argument("--env-file", default=".env", help="Path to a .env file (default: .env)")
    parser.add_argument("--port", type=int, help="Override PORT")
    parser.add_argument("--no-browser", action="store_true", help="Do not open the browser on startup")
    parser.add_argument("--no-pkce", action="store_true", help="Run the flow without PKCE")

    args = parser.parse_args(argv)

    commands = {
        "start": cmd_start,
        "check": cmd_check,
        "version": cmd_version,
    }
    if args.command != "version":
        load_environment(args.env_file)
    commands[args.command](args)


if __name__ == "__main__":
    main()
