"""
Entry point for the site server (contact API + localized SPA shell).

Usage:
    python run_api.py                    # Development (auto-reload)
    python run_api.py --production       # Production mode

Or directly with uvicorn:
    uvicorn api:create_app --factory --reload --port 3001
"""

import os
import sys
import argparse
import logging

# Ensure the script's directory is in Python path for local imports
_script_dir = os.path.dirname(os.path.abspath(__file__))
if _script_dir not in sys.path:
    sys.path.insert(0, _script_dir)


def main():
    parser = argparse.ArgumentParser(description='Web Firm Solutions site server')
    parser.add_argument('--port', type=int, default=int(os.environ.get('PORT', 3001)),
                        help='Port to listen on (default: $PORT or 3001)')
    parser.add_argument('--host', default='0.0.0.0', help='Host to bind to (default: 0.0.0.0)')
    parser.add_argument('--production', action='store_true', help='Run in production mode')
    parser.add_argument('--workers', type=int, default=1,
                        help='Number of workers (production; rate limits and CAPTCHAs are per worker)')
    parser.add_argument('--log-level', default='info',
                        choices=['debug', 'info', 'warning', 'error'], help='Log level')
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    import uvicorn

    logging.getLogger(__name__).info(f"Server starting on port {args.port}")
    if args.production:
        uvicorn.run(
            "api:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            workers=args.workers,
            log_level=args.log_level,
        )
    else:
        uvicorn.run(
            "api:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            reload=True,
            reload_dirs=[_script_dir],
            log_level=args.log_level,
        )


if __name__ == '__main__':
    main()
