# File: linkwalk/engine.py
"""linkwalk.engine: orchestration layer that runs a walk and aggregates the result."""

from __future__ import annotations

import asyncio
from typing import Optional

from linkwalk.aggregator import CrawlReport, aggregate_results
from linkwalk.config import WalkConfig, load_config
from linkwalk.fixtures import demo_fetcher
from linkwalk.logger import logger
from linkwalk.walker.fetcher import FakeFetcher, HttpFetcher
from linkwalk.walker.traverser import CrawlResult, crawl

__all__ = ["Engine", "start_walk"]


async def start_walk(cfg: WalkConfig) -> CrawlResult:
    """Build the configured fetcher and walk from ``cfg.root``."""
    if cfg.fetcher == "http":
        async with HttpFetcher(
            timeout=cfg.timeout, user_agent=cfg.user_agent, same_host=cfg.same_host
        ) as fetcher:
            return await crawl(cfg.root, cfg.max_depth, fetcher, max_concurrency=cfg.max_concurrency)

    fetcher = FakeFetcher.from_file(cfg.graph) if cfg.graph else demo_fetcher()
    return await crawl(cfg.root, cfg.max_depth, fetcher, max_concurrency=cfg.max_concurrency)


class Engine:
    """Facade for the CLI and tests: load config, run the walk, aggregate results."""

    @staticmethod
    def load_config(path: Optional[str]) -> WalkConfig:
        return load_config(path)

    def __init__(self, config: WalkConfig) -> None:
        self.config = config

    def run(self) -> CrawlReport:
        """Run the walk to completion in a fresh event loop and return the report."""
        logger.info("Starting walk…")
        try:
            result = asyncio.run(start_walk(self.config))
        except Exception as exc:
            logger.error("Walk failed: %s", exc)
            raise
        return aggregate_results(result)
