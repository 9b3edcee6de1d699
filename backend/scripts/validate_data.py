#!/usr/bin/env python3
"""
Validate the mall dataset for missing fields, bad coordinates, or duplicates.

Usage:
    python -m scripts.validate_data [path/to/malls.json]

Defaults to the configured DATA_FILE. Exits with status 1 when the file is
missing, unreadable, or has issues.
"""

import argparse
import json
import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import settings
from app.services.validation_service import count_stores, validate_dataset


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Validate the mall/store dataset")
    parser.add_argument("path", nargs="?", default=settings.DATA_FILE, help="Mall JSON document")
    args = parser.parse_args(argv)

    data_path = Path(args.path)
    if not data_path.exists():
        print(f"❌ Could not find mall data at {data_path}", file=sys.stderr)
        return 1

    try:
        malls = json.loads(data_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        print(f"❌ Could not read {data_path}: {e}", file=sys.stderr)
        return 1

    issues = validate_dataset(malls)

    if not issues:
        print("✅ All mall and store data looks valid.")
        print(f"📊 Validated {len(malls)} malls with {count_stores(malls)} total stores")
        return 0

    print(f"⚠️  Found {len(issues)} issues:\n", file=sys.stderr)
    for issue in issues:
        print(f" - {issue}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
