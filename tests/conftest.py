"""
Pytest configuration and fixtures for all tests.
"""

import os
import sys

import httpx
import pytest

# Make the package importable without installing it
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from gitdir_probe.config import ScanConfig

LISTING = b"<html><head><title>Index of /.git</title></head><body><a href='HEAD'>HEAD</a></body></html>"


def mock_client(handler):
    """AsyncClient whose requests are answered by handler(request)."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), verify=False)


@pytest.fixture
def fast_config():
    """No waiting between domains or batches."""
    return ScanConfig(request_delay=0, network_pause=0, request_timeout=5)
