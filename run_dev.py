#!/usr/bin/env python3
"""Development runner script for the Zendesk bridge."""

import sys
from pathlib import Path

from zendesk_bridge.errors import ConfigurationError
from zendesk_bridge.models.config import load_settings
from zendesk_bridge.utils.logger import setup_logging, get_logger


def main():
    """Main development runner."""
    print("🚀 Starting Zendesk bridge in development mode...")
    
    env_file = Path(".env")
    if not env_file.exists():
        print("❌ .env file not found!")
        print("📝 Please copy .env.example to .env and configure your settings:")
        print("   cp .env.example .env")
        print("   # Then edit .env with your Zendesk OAuth client credentials")
        return
    
    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"❌ {e}")
        print("📝 Please configure these in your .env file")
        return
    
    setup_logging(log_level=settings.log_level)
    logger = get_logger(__name__)
    
    logger.info("🔧 Development mode configuration:")
    logger.info(f"   Environment: {settings.environment}")
    logger.info(f"   Log Level: {settings.log_level}")
    logger.info(f"   Host: {settings.host}:{settings.port}")
    logger.info(f"   Zendesk: {settings.zendesk_base_url}")
    logger.info(f"   Slack Webhook: {'configured' if settings.slack_webhook_url else 'Not configured (alerts disabled)'}")
    
    print("✅ Configuration looks good!")
    print("\n🔗 Available endpoints:")
    print(f"   Zendesk Auth: http://{settings.host}:{settings.port}/")
    print(f"   Tickets: http://{settings.host}:{settings.port}/tickets")
    print(f"   Health Check: http://{settings.host}:{settings.port}/health")
    print(f"   API Docs: http://{settings.host}:{settings.port}/docs")
    
    print(f"\n🤖 Starting server on {settings.host}:{settings.port}...")
    print("   Press Ctrl+C to stop")
    
    import uvicorn
    uvicorn.run(
        "zendesk_bridge.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n👋 Shutting down...")
    except Exception as e:
        print(f"❌ Unexpected error: {e}")
        sys.exit(1)
