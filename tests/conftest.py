# File: tests/conftest.py
import logging
from pathlib import Path
from typing import Dict, List, Tuple

import pytest

from linkwalk.logger import LOGGER_NAME
from linkwalk.walker.fetcher import FakeFetcher

#: A -> {B, C}; B -> {A, C, D1, D2}; C -> {A, B}; D1 and D2 unknown
LETTERS: Dict[str, Tuple[str, List[str]]] = {
    "A": ("Page A", ["B", "C"]),
    "B": ("Page B", ["A", "C", "D1", "D2"]),
    "C": ("Page C", ["A", "B"]),
}


@pytest.fixture()
def letters_fetcher() -> FakeFetcher:
    """Fetcher over the four-letter graph with a small delay so branches interleave."""
    return FakeFetcher.from_mapping(LETTERS, delay=0.01)


@pytest.fixture()
def graph_file(tmp_path) -> Path:
    """
    Write the letters graph as a YAML fixture file and return its path.
    """
    path = tmp_path / "graph.yaml"
    path.write_text(
        "pages:\n"
        "  A: {body: Page A, links: [B, C]}\n"
        "  B: {body: Page B, links: [A, C, D1, D2]}\n"
        "  C: {body: Page C, links: [A, B]}\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def reset_logger():
    """The CLI binds handlers to CliRunner's stdout; drop them after each test."""
    yield
    lg = logging.getLogger(LOGGER_NAME)
    lg.handlers.clear()
    lg.propagate = True
    lg.setLevel(logging.NOTSET)
