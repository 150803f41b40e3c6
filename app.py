#!/usr/bin/env python3
#USE VENV: source venv/bin/activate
"""
Run script for the medical equipment dashboard
"""

import argparse
import os
import sys

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from medequip import create_app
from medequip.build import build_database
from medequip.utils.logger import get_logger

# Note: the admin password and secret key are configured via environment variables.
# Run 'python generate_env.py' to create a .env file.

app = create_app()
logger = get_logger("medequip.run")


def parse_arguments():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='MedEquip - hospital equipment management')
    parser.add_argument('--build-only', action='store_true',
                        help='Create tables and verify critical data, then exit without starting the server')
    parser.add_argument('--reset-data', action='store_true',
                        help='Delete all locally stored records, users and settings before building')
    return parser.parse_args()


if __name__ == '__main__':
    args = parse_arguments()

    logger.debug("Starting MedEquip...")
    build_database(app, reset=args.reset_data)

    if args.build_only:
        logger.debug("Build completed. Exiting without starting web server.")
        sys.exit(0)

    # FLASK_DEBUG: Enable/disable debug mode (default: False for security)
    debug_mode = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on')

    # USE_RELOADER: Enable/disable auto-reloader (default: False in production)
    use_reloader = os.environ.get('USE_RELOADER', 'False').lower() in ('true', '1', 'yes', 'on')

    # FLASK_HOST: Server host (default: 127.0.0.1 for security)
    host = os.environ.get('FLASK_HOST', '127.0.0.1')

    # FLASK_PORT: Server port (default: 5000)
    port = int(os.environ.get('FLASK_PORT', '5000'))

    if debug_mode:
        logger.warning("⚠️  DEBUG MODE ENABLED - Do not use in production!")

    logger.info(f"Starting server on {host}:{port} (debug={debug_mode}, reloader={use_reloader})")
    app.run(debug=debug_mode, host=host, port=port, use_reloader=use_reloader)
