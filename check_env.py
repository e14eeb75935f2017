#!/usr/bin/env python3
"""Helper script to check and create the .env file for the directions API key."""

from pathlib import Path
import os
import sys

TEMPLATE = """# Google Directions API (required for route planning)
# Enable the Directions API in Google Cloud Console and create an API key.
DRIVELESS_GOOGLE_API_KEY=your-api-key-here

# API Configuration
DRIVELESS_API_PREFIX=/api
# DRIVELESS_FRONTEND_ALLOWED_ORIGINS - JSON array or comma-separated list

# Route history location
DRIVELESS_DATA_ROOT=./data

# Request traffic-aware durations (departure_time=now)
DRIVELESS_INCLUDE_TRAFFIC=true
"""


def _mask(value: str) -> str:
    if len(value) > 12:
        return value[:6] + "..." + value[-4:]
    return "***"


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("DriveLess Environment Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        print(f"❌ .env file NOT found at: {env_file}")
        print("Creating template .env file...")
        with open(env_file, "w", encoding="utf-8") as f:
            f.write(TEMPLATE)
        print(f"✅ Created .env file at: {env_file}")
        print("⚠️  Please edit .env and add your Google API key!")
        return

    print(f"✅ Found .env file at: {env_file}")
    print()

    env_key = os.getenv("DRIVELESS_GOOGLE_API_KEY")
    if env_key:
        print(f"✅ DRIVELESS_GOOGLE_API_KEY (from environment): {_mask(env_key)}")
    else:
        print("ℹ️  DRIVELESS_GOOGLE_API_KEY not set in environment, relying on .env")

    print()
    print("Testing config loading...")
    try:
        sys.path.insert(0, str(project_root / "src"))
        from driveless.config import settings

        print(f"Data root: {settings.data_root}")
        print(f"Include traffic: {settings.include_traffic}")
        if settings.google_api_key:
            print(f"✅ Config loaded GOOGLE_API_KEY: {_mask(settings.google_api_key)}")
            print("=" * 60)
            print("✅ SUCCESS: Route planning is configured!")
            print("=" * 60)
        else:
            print("=" * 60)
            print("❌ ERROR: Google API key is NOT configured")
            print("=" * 60)
            print("1. Make sure .env file exists in project root")
            print("2. Make sure variables start with DRIVELESS_ prefix")
            print("3. Restart the server after editing .env")
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        print("Make sure you're running this from the project root directory")


if __name__ == "__main__":
    main()
