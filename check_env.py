#!/usr/bin/env python3
"""Helper script to check and create .env file for the Gemini analysis configuration."""

from pathlib import Path
import os

def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Safai Sathi Environment Variables Checker")
    print("=" * 60)
    print()

    # Check if .env exists
    if env_file.exists():
        print(f"✅ Found .env file at: {env_file}")
        print()
        print("Current contents:")
        print("-" * 60)
        with open(env_file, "r", encoding="utf-8") as f:
            content = f.read()
            # Mask the key for security
            for line in content.split("\n"):
                if "SAFAI_GEMINI_API_KEY" in line and "=" in line:
                    name, key_value = line.split("=", 1)
                    key_value = key_value.strip()
                    if len(key_value) > 12:
                        print(f"{name}={key_value[:6]}...{key_value[-4:]}")
                    else:
                        print(line)
                else:
                    print(line)
        print("-" * 60)
        print()
    else:
        print(f"❌ .env file NOT found at: {env_file}")
        print()
        print("Creating template .env file...")
        print()

        template = """# Gemini image analysis (reports fall back to manual review without it)
# Get a key from: https://aistudio.google.com/app/apikey
SAFAI_GEMINI_API_KEY=your-gemini-api-key-here
SAFAI_GEMINI_MODEL=gemini-2.5-flash

# API Configuration
SAFAI_API_PREFIX=/api
# SAFAI_FRONTEND_ALLOWED_ORIGINS - Leave commented to use defaults
# JSON array: ["http://localhost:5173","http://127.0.0.1:5173"]
# Or comma-separated: http://localhost:5173,http://127.0.0.1:5173

# Data Paths
SAFAI_DATA_ROOT=./data
SAFAI_REPORT_STORE_FILE=./data/safai_reports.json

# Largest number of reports accepted by one route optimization
SAFAI_ROUTE_MAX_STOPS=50
"""

        with open(env_file, "w", encoding="utf-8") as f:
            f.write(template)

        print(f"✅ Created .env file at: {env_file}")
        print()
        print("⚠️  Please edit .env and add your Gemini API key!")
        print()
        return

    # Check environment variables
    print("Checking environment variables...")
    print()

    gemini_key = os.getenv("SAFAI_GEMINI_API_KEY")
    if gemini_key:
        print(f"✅ SAFAI_GEMINI_API_KEY (from environment): {gemini_key[:6]}...")
    else:
        print("❌ SAFAI_GEMINI_API_KEY not found in environment")

    print()

    # Test loading from config
    print("Testing config loading...")
    print()

    try:
        import sys
        sys.path.insert(0, str(project_root / "src"))
        from safai.config import settings

        print(f"   Report store: {settings.report_store_file}")
        print(f"   Model: {settings.gemini_model}")
        print(f"   Route stop limit: {settings.route_max_stops}")
        print()

        if settings.gemini_api_key:
            print("=" * 60)
            print("✅ SUCCESS: Gemini analysis is configured!")
            print("=" * 60)
        else:
            print("=" * 60)
            print("❌ WARNING: Gemini analysis is NOT configured")
            print("=" * 60)
            print()
            print("Reports will be stored with the fallback analysis for manual review.")
            print("1. Make sure .env file exists in project root")
            print("2. Make sure variables start with SAFAI_ prefix")
            print("3. Restart backend after editing .env")
            print()
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        print()
        print("Make sure you're running this from the project root directory")

if __name__ == "__main__":
    main()
