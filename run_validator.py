#!/usr/bin/env python3
"""
CLI script to validate pending article drafts.

Usage:
    python run_validator.py articles/pending/*.json
    python run_validator.py my-article.json --review
"""

import argparse
import json
import sys
from pathlib import Path

from note_parser.validator import review_issues, validate_article


def main():
    parser = argparse.ArgumentParser(description="Validate article draft JSON files")
    parser.add_argument("files", nargs="+", help="Draft JSON files")
    parser.add_argument("--review", action="store_true",
                        help="Also require every review placeholder to be filled in")
    args = parser.parse_args()

    total_errors = 0
    total_warnings = 0

    for filepath in args.files:
        path = Path(filepath)

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            print(f"✗ {path.name}: {e}")
            total_errors += 1
            continue

        if not isinstance(data, dict):
            print(f"✗ {path.name}: top-level JSON value must be an object")
            total_errors += 1
            continue

        issues = validate_article(data)
        if args.review:
            issues += review_issues(data)

        if not issues:
            print(f"✓ {path.name}")
            continue

        print(f"\n{path.name}")
        for issue in issues:
            icon = "✗" if issue.severity == "error" else "!"
            print(f"   {icon} [{issue.field}] {issue.message}")
        total_errors += sum(1 for i in issues if i.severity == "error")
        total_warnings += sum(1 for i in issues if i.severity == "warning")

    print(f"\nFiles: {len(args.files)}  Errors: {total_errors}  Warnings: {total_warnings}")
    sys.exit(1 if total_errors else 0)


if __name__ == "__main__":
    main()
