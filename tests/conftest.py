"""Pytest configuration and shared fixtures for all tests."""

from unittest.mock import Mock

import pytest
import requests


def make_response(status_code=200, json_data=None, text="", headers=None):
    """Build a mock requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.headers = headers or {}
    response.text = text
    if json_data is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = json_data
    return response


def route(responses):
    """Side effect for session.get answering by URL, 404 for anything unknown."""

    def get(url, **kwargs):
        return responses.get(url) or make_response(404)

    return get


@pytest.fixture
def mock_session():
    """Create a mock requests session."""
    return Mock(spec=requests.Session)


@pytest.fixture
def write_config(tmp_path):
    """Write a notice configuration file into the test repository."""

    def _write(content: str):
        config_file = tmp_path / "notice.yaml"
        config_file.write_text(content, encoding="utf-8")
        return config_file

    return _write
