#!/usr/bin/env python3
"""
History Probe Script
====================

Standalone script to exercise the viewer core against a live history service.

This script:
    1. Starts a PlaybackController against the given history service
    2. Plays through the history for a configurable duration
    3. Logs playback and fetch stats at a fixed interval
    4. Reports a final summary

Prerequisites:
    - A history service must be reachable at the configured URL
    - Install the package: pip install -e .

Usage:
    python scripts/probe_history.py --duration 30
    python scripts/probe_history.py --url http://localhost:3000/api/v1/history
"""

import argparse
import asyncio
import logging
import sys
import time

from logo_replay.history import HistoryClient
from logo_replay.models.playback import PlaybackState
from logo_replay.playback import PlaybackController
from logo_replay.view import derive_view


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger(__name__)


async def run_probe(
    url: str,
    duration: int,
    advance_ms: int,
    report_interval: int,
) -> dict:
    """
    Run the probe.

    Args:
        url: Full URL of the history endpoint
        duration: Probe duration in seconds
        advance_ms: Advance timer period in milliseconds
        report_interval: Seconds between progress reports

    Returns:
        Final store metrics dict
    """
    logger.info("=" * 60)
    logger.info(f"History URL: {url}")
    logger.info(f"Duration: {duration} seconds")
    logger.info("=" * 60)

    controller = PlaybackController(
        client=HistoryClient(url),
        initial=PlaybackState(playing=True),
        advance_interval=advance_ms / 1000.0,
        refresh_interval=max(duration / 2, 1.0),
    )

    start_time = time.time()
    await controller.start()

    try:
        while time.time() - start_time < duration:
            await asyncio.sleep(report_interval)

            view = derive_view(controller.store.status, controller.state)
            metrics = controller.store.metrics
            logger.info(
                f"[{time.time() - start_time:.0f}s] "
                f"status={view.status_text or 'ok'} | "
                f"snapshots={view.slider_max + 1 if view.status_text is None else 0} | "
                f"cursor={view.cursor} ({view.time}) | "
                f"fetches={metrics.fetches_applied} failures={metrics.failures}"
            )
    finally:
        await controller.stop()
        controller.client.close()

    return controller.store.metrics.to_dict()


def main() -> None:
    parser = argparse.ArgumentParser(description="Logo history probe")
    parser.add_argument(
        "--url",
        default="http://localhost:3000/api/v1/history",
        help="History endpoint URL",
    )
    parser.add_argument("--duration", type=int, default=30, help="Probe duration in seconds")
    parser.add_argument("--advance-ms", type=int, default=50, help="Advance timer period")
    parser.add_argument("--report-interval", type=int, default=5, help="Seconds between reports")
    args = parser.parse_args()

    try:
        metrics = asyncio.run(
            run_probe(
                url=args.url,
                duration=args.duration,
                advance_ms=args.advance_ms,
                report_interval=args.report_interval,
            )
        )
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(1)

    logger.info("=" * 60)
    logger.info(f"Final metrics: {metrics}")
    sys.exit(0 if metrics["successes"] > 0 else 1)


if __name__ == "__main__":
    main()
