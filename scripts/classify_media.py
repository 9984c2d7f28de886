#!/usr/bin/env python3
"""
Classify a media item from the command line.

Runs the same analysis the upload pipeline uses and prints the per-category
detections and the final content rating.

Usage:
    python scripts/classify_media.py "Zombie Graveyard Horror Nightmare"
    python scripts/classify_media.py "Beach day" --description "sunny" \
        --filepath https://res.cloudinary.com/demo/image/upload/v1712/photos/beach.jpg \
        --resource-type image
    python scripts/classify_media.py --status
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add project root for imports when run from a checkout
sys.path.insert(0, str(Path(__file__).parent.parent))
from content_moderation.config import config, setup_logging
from content_moderation.moderation.moderator import ContentModerator, get_default_moderator
from content_moderation.reporting import print_moderation_summary


def main():
    parser = argparse.ArgumentParser(description="Classify media title/description into a content rating")
    parser.add_argument("title", nargs="?", help="Media title")
    parser.add_argument("--description", default="", help="Media description")
    parser.add_argument("--filepath", help="Stored file URL (Cloudinary URLs enable provider labels)")
    parser.add_argument("--resource-type", default="video", choices=["image", "video"], help="Asset type")
    parser.add_argument("--text-only", action="store_true", help="Skip the external moderation provider")
    parser.add_argument("--json", action="store_true", help="Print the stored analysis document as JSON")
    parser.add_argument("--status", action="store_true", help="Show configuration status and exit")
    parser.add_argument("--log-level", default=None, help="Logging level (default from config)")
    args = parser.parse_args()

    setup_logging(args.log_level)

    if args.status:
        config.print_status()
        return

    if not args.title:
        parser.error("title is required unless --status is given")

    moderator = ContentModerator() if args.text_only else get_default_moderator()

    result = asyncio.run(
        moderator.classify(args.title, args.description, args.filepath, args.resource_type)
    )

    if args.json:
        print(json.dumps(
            {
                "content_rating": result.content_rating.value,
                "sensitivity_status": result.sensitivity_status.value,
                "reason": result.reason,
                "moderation_analysis": result.analysis.to_dict(),
            },
            indent=2,
        ))
    else:
        print_moderation_summary(args.title, result)


if __name__ == "__main__":
    main()
