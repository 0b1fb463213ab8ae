"""Pytest configuration and shared fixtures for the goastor test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os
from pathlib import Path
from typing import Callable

import pytest
from hypothesis import Phase, Verbosity, settings
from utils import sample_file as build_sample_file

from goastor.ast import File, Node, json_to_ast

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "trees"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def fixtures_dir() -> Path:
    """Provide the directory holding JSON tree fixtures.

    Returns
    -------
    Path
        Directory containing ``*.in.json`` / ``*.out.json`` pairs.

    """
    return FIXTURES_DIR


@pytest.fixture
def load_tree(fixtures_dir: Path) -> Callable[[str], Node]:
    """Provide a loader that reads a JSON tree fixture by file name.

    Returns
    -------
    callable
        Function taking a fixture file name and returning the decoded tree.

    """

    def _load(name: str) -> Node:
        return json_to_ast((fixtures_dir / name).read_text(encoding="utf-8"))

    return _load


@pytest.fixture
def sample_file() -> File:
    """Provide a freshly built sample file tree.

    Returns
    -------
    File
        Tree described in ``utils.sample_file``.

    """
    return build_sample_file()
