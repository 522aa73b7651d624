#!/usr/bin/env python3
"""
Startup script for the Ascent receptionist phone service
"""

import os
import sys
import logging
import argparse
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv(project_root / ".env")

logger = logging.getLogger("start_receptionist")


def check_dependencies():
    """Check if required dependencies are installed."""
    REQUIRED_PACKAGES = [
        'fastapi',
        'uvicorn',
        'twilio',
        'openai',
        'pydantic_settings',
        'multipart',
    ]

    missing_packages = []

    for package in REQUIRED_PACKAGES:
        try:
            __import__(package)
        except ImportError:
            missing_packages.append(package)

    if missing_packages:
        print(f"❌ Missing required packages: {', '.join(missing_packages)}")
        print("Install them with: pip install -e .")
        return False

    return True


def check_environment():
    """Check environment variables"""
    required_vars = [
        'TWILIO_ACCOUNT_SID',
        'TWILIO_AUTH_TOKEN',
        'OPENAI_API_KEY',
        'PUBLIC_BASE_URL',
    ]

    missing_vars = [var for var in required_vars if not os.getenv(var)]
    if missing_vars:
        print(f"⚠️  Missing environment variables: {', '.join(missing_vars)}")
        print("   The service will start, but signature checks or the model fallback may not work.")
    return not missing_vars


def main():
    parser = argparse.ArgumentParser(description="Start the Ascent receptionist phone service")
    parser.add_argument("--host", default=None, help="Bind host (default: SERVER_HOST)")
    parser.add_argument("--port", type=int, default=None, help="Bind port (default: SERVER_PORT or PORT)")
    parser.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL)")
    parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes")
    args = parser.parse_args()

    if not check_dependencies():
        sys.exit(1)
    check_environment()

    import uvicorn
    from receptionist.config.settings import get_settings
    from receptionist.services.phone_service import configure_logging

    settings = get_settings()
    log_level = args.log_level or settings.LOG_LEVEL
    configure_logging(log_level)

    host = args.host or settings.SERVER_HOST
    port = args.port or settings.SERVER_PORT
    logger.info(f"🚀 Starting receptionist on {host}:{port}")
    logger.info(f"📞 Voice webhook: {settings.PUBLIC_BASE_URL or 'http://' + host + ':' + str(port)}{settings.VOICE_ENDPOINT}")

    uvicorn.run(
        "receptionist.services.phone_service:app",
        host=host,
        port=port,
        log_level=log_level.lower(),
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
