"""CLI for detecting breaking news in current world headlines."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from common.aws import upload_jsonl_records_to_s3
from common.cli_helpers import parse_csv_arg, save_jsonl_local, setup_logging
from common.config import NewsConfig, load_config
from common.datetime import utcnow
from common.serialization import serialize_dataclass
from compute_embeddings.gateway import EmbeddingGateway
from compute_embeddings.providers import build_provider
from detect_breaking.helpers import list_headlines, parse_detect_breaking_args
from detect_breaking.models import BreakingCheckResult
from detect_breaking.run import build_snapshot, run_breaking_check
from detect_breaking.snapshot_store import LocalSnapshotStore
from ingest_headlines.fetch_headlines import fetch_headlines, mock_headlines

logger = logging.getLogger(__name__)

HEADLINE_PREVIEW_COUNT = 5


def _fetch_records(config: NewsConfig, sources: list[str], mock: bool) -> list[dict]:
    if mock or config.feeds.mock:
        logger.info("Using mock headlines")
        return mock_headlines()
    return fetch_headlines(
        sources,
        timeout=config.feeds.request_timeout,
        max_workers=config.feeds.max_workers,
    )


def _save_outputs(result: BreakingCheckResult, config: NewsConfig, load_local: bool, load_s3: bool) -> None:
    now = utcnow()
    if load_local:
        for prefix, records in (("breaking_clusters", result.clusters), ("breaking_decisions", result.breaking)):
            path = save_jsonl_local(
                [serialize_dataclass(record) for record in records],
                prefix,
                now,
                output_dir=config.output.local_dir,
            )
            logger.info("Saved %d records to %s", len(records), path)

    if load_s3:
        upload_jsonl_records_to_s3(result.clusters, "breaking_clusters")
        upload_jsonl_records_to_s3(result.breaking, "breaking_decisions")


def main(argv: list[str] | None = None) -> int:
    args = parse_detect_breaking_args(argv)
    load_dotenv()
    setup_logging(args.debug)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Could not load config: %s", e)
        return 1

    sources = parse_csv_arg(args.sources) or config.feeds.world_sources
    records = _fetch_records(config, sources, args.mock)
    if not records:
        logger.warning("No headlines fetched")
        return 0

    store = LocalSnapshotStore(Path(args.snapshot_path or config.output.snapshot_path))
    previous = store.load()

    provider = build_provider(config.embedding.provider, config.embedding.model)
    result = run_breaking_check(
        records,
        EmbeddingGateway(provider),
        previous=previous,
        config=config,
        force=args.force,
    )

    if not result.proceed:
        logger.info("Headlines unchanged since last reaction (ratio %.2f); nothing to do", result.change_ratio)
        return 0

    logger.info("Top headlines: %s", list_headlines(
        [cluster.items[0] for cluster in result.clusters], HEADLINE_PREVIEW_COUNT
    ))
    for cluster in result.clusters:
        logger.info("Cluster %s '%s' size=%d score=%.2f", cluster.id, cluster.title, cluster.size, cluster.score)
    for decision in result.breaking:
        logger.info("BREAKING %s (%s)", decision.cluster_id, decision.rationale)

    _save_outputs(result, config, args.load_local, args.load_s3)

    if args.mark_reacted and result.has_breaking:
        store.save(build_snapshot(result, max_clusters=config.output.max_retained_clusters))

    return 0


if __name__ == "__main__":
    sys.exit(main())
