"""Helper functions for detect_breaking CLI."""

from __future__ import annotations

import argparse
from typing import Any

from common.utils import get_value

MAX_HEADLINE_CHARS = 140


def list_headlines(items: list[Any], n: int) -> str:
    """Render the first n headlines as "title — source" joined by " · "."""
    parts = []
    for item in items[:n]:
        title = (get_value(item, "title") or "").strip()
        source = (get_value(item, "source") or "").strip()
        if len(title) > MAX_HEADLINE_CHARS:
            title = title[: MAX_HEADLINE_CHARS - 3] + "…"
        parts.append(f"{title} — {source}" if source else title)
    return " · ".join(parts)


def parse_detect_breaking_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for detect_breaking."""

    parser = argparse.ArgumentParser(description="Cluster current headlines and flag breaking news.")

    # Input options
    parser.add_argument("--config", default=None, help="Config name under configs/ (default: $CONFIG_ENV or prod)")
    parser.add_argument(
        "--sources",
        default=None,
        help="Comma-separated feed URLs (default: configured world sources)",
    )
    parser.add_argument("--mock", action="store_true", help="Use sample headlines instead of live feeds")
    parser.add_argument("--snapshot-path", default=None, help="Headline snapshot file (default: from config)")

    # Decision options
    parser.add_argument("--force", action="store_true", help="Run clustering even if headlines barely changed")
    parser.add_argument(
        "--mark-reacted",
        action="store_true",
        help="Store the current headlines as the last reacted-to snapshot when breaking news is found",
    )

    # Output options
    parser.add_argument("--load-s3", action="store_true", help="Upload clusters and decisions to S3")
    parser.add_argument("--load-local", action="store_true", help="Save clusters and decisions to local files")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG logging")

    return parser.parse_args(argv)
