"""
Development server for the Pagesift extraction API.

Usage:
    python run_app.py [--host HOST] [--port PORT] [--no-debug]
"""
import argparse
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from pagesift.api import create_app
from pagesift.config import Config
from pagesift.logger import get_logger

logger = get_logger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Run the Pagesift API with Flask's development server")
    parser.add_argument("--host", default=Config.FLASK_HOST)
    parser.add_argument("--port", type=int, default=Config.FLASK_PORT)
    parser.add_argument("--no-debug", action="store_true", help="Disable the reloader and debugger")
    args = parser.parse_args()

    for problem in Config.validate():
        logger.warning(f"Config: {problem}")

    debug = Config.FLASK_DEBUG and not args.no_debug
    logger.info(
        f"Serving extraction API on {args.host}:{args.port} "
        f"(image wait {Config.IMAGE_WAIT_TIMEOUT_MS}ms, debug={debug})"
    )

    create_app().run(host=args.host, port=args.port, debug=debug)


if __name__ == "__main__":
    main()
