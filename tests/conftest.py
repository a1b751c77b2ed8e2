"""Pytest configuration and shared fixtures for the argconfig test suite.

This module provides shared fixtures and test configuration used across the
unit and integration tests.
"""

import argparse
import os

import pytest

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Verbosity, settings

    settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=50)

    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, property tests will be skipped
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "property: Property-based tests using Hypothesis")


def build_myapp_parser() -> argparse.ArgumentParser:
    """Build the parser used across the suite: an input, two flags and a repeatable tag."""
    parser = argparse.ArgumentParser(prog="myapp")
    parser.add_argument("-i", "--input")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("-d", "--debug", action="store_true")
    parser.add_argument("-t", "--tag", action="append")
    return parser


@pytest.fixture
def myapp_parser() -> argparse.ArgumentParser:
    """Provide a fresh ``myapp`` parser.

    Returns
    -------
    argparse.ArgumentParser
        Parser with ``--input``, ``--verbose``, ``--debug`` and ``--tag``.

    """
    return build_myapp_parser()

