#!/usr/bin/env python3
"""
CLI script to turn saved note pages into pending article drafts.

Each page becomes one draft JSON (body blocks, suggested tags, placeholder
slug/excerpt/description). A reviewer fills in the placeholders, then the
draft is validated with run_validator.py and published.

Usage:
    python run_extractor.py page.html --url https://note.com/brighty/n/nce9b4a364809 --category tips
    python run_extractor.py page.html --url ... -o articles/pending
    python run_extractor.py page.html --url ... --rich-text
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()

from note_parser.config import CATEGORIES, DEFAULT_CATEGORY
from note_parser.exceptions import NoteParserError
from note_parser.main import NoteParser


def main():
    parser = argparse.ArgumentParser(description="Build article drafts from saved note pages")
    parser.add_argument("files", nargs="+", help="Saved HTML pages")
    parser.add_argument("--url", "-u", required=True, help="Source URL of the article")
    parser.add_argument("--category", "-c", default=DEFAULT_CATEGORY,
                        choices=sorted(CATEGORIES), help="Article category")
    parser.add_argument("--output", "-o", help="Directory for pending-<ms>.json drafts")
    parser.add_argument("--rich-text", "-r", action="store_true",
                        help="Include the CMS rich-text body and thumbnail layout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    note_parser = NoteParser(log_level=logging.DEBUG if args.verbose else logging.INFO)
    output_dir = Path(args.output) if args.output else None
    failed = False

    for filepath in args.files:
        path = Path(filepath)
        print(f"Extracting: {path.name}")

        try:
            draft = note_parser.parse_file(path, args.url, args.category)
        except (OSError, NoteParserError) as e:
            print(f"  ✗ Error: {e}")
            failed = True
            continue

        record = draft.to_record()
        if args.rich_text:
            layout = note_parser.thumbnail_layout(draft)
            record["richText"] = note_parser.to_rich_text(draft).to_cms()
            record["thumbnail"] = {"text": layout.display_text, "fontSize": layout.font_size}

        output = json.dumps(record, indent=2, ensure_ascii=False)
        print(f"  ✓ {len(draft.body)} blocks, tags: {', '.join(draft.tags)}")

        if output_dir:
            output_dir.mkdir(parents=True, exist_ok=True)
            out_file = output_dir / f"pending-{int(time.time() * 1000)}.json"
            out_file.write_text(output, encoding="utf-8")
            print(f"  Saved to: {out_file}")
        else:
            print(output)

    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
