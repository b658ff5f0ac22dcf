#!/usr/bin/env python3
"""
Career Coach Application Entry Point
Uses application factory pattern for better modularity and testing
"""

import os
import sys
import argparse
import logging
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

# Import application factory
from app_factory import create_app
from config import config

logger = logging.getLogger(__name__)

def parse_arguments(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description='Run the career coach consultation service'
    )
    parser.add_argument(
        '--port',
        type=int,
        default=5000,
        help='Port to run the app on (default: 5000)'
    )
    parser.add_argument(
        '--host',
        type=str,
        default='0.0.0.0',
        help='Host to bind to (default: 0.0.0.0)'
    )
    parser.add_argument(
        '--config',
        type=str,
        default='default',
        choices=['default', 'production', 'development'],
        help='Configuration environment (default: default)'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode'
    )

    return parser.parse_args(argv)

def validate_environment(config_name):
    """Check that the database location is usable before starting"""
    db_path = config[config_name].DATABASE_PATH
    db_dir = os.path.dirname(os.path.abspath(db_path))

    if not os.path.isdir(db_dir):
        logger.error(f"Database directory does not exist: {db_dir}")
        logger.error("Set CAREER_COACH_DB_PATH in your .env file or environment")
        return False

    if not os.access(db_dir, os.W_OK):
        logger.error(f"Database directory is not writable: {db_dir}")
        return False

    logger.info(f'Using consultation database at {db_path}')
    return True

def main(argv=None):
    """Main application entry point"""
    try:
        # Parse command line arguments
        args = parse_arguments(argv)

        config_name = 'development' if args.debug else args.config

        # Validate environment
        if not validate_environment(config_name):
            sys.exit(1)

        # Create Flask application using factory
        app = create_app(config_name)

        # Override debug setting if specified
        if args.debug:
            app.config['DEBUG'] = True

        # Get port from environment variable (for Heroku) or use argument
        port = int(os.environ.get('PORT', args.port))

        # Log startup information
        logger.info(f'Starting career coach app on {args.host}:{port}')
        logger.info(f'Configuration: {config_name}')
        logger.info(f'Debug mode: {app.config.get("DEBUG", False)}')

        # Log registered routes for debugging
        logger.debug("Registered URL Rules:")
        for rule in app.url_map.iter_rules():
            logger.debug(f"Route: {rule}, Endpoint: {rule.endpoint}")

        # Run the application
        app.run(
            host=args.host,
            port=port,
            debug=app.config.get('DEBUG', False),
            threaded=True
        )

    except KeyboardInterrupt:
        logger.info("Application stopped by user")
    except Exception as e:
        logger.error(f"Failed to start application: {e}", exc_info=True)
        sys.exit(1)

if __name__ == '__main__':
    main()
