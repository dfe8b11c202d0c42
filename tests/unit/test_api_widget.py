"""
Unit tests for widget API endpoints.
"""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

# Skip tests if fastapi is not installed
pytest.importorskip("fastapi")

from fastapi.testclient import TestClient
from commit_tracker.main import app
from commit_tracker.models import (
    FAILED_COMMIT,
    Commit,
    DisplayRecord,
    RepositoryIdentity,
    Timeline,
)
from commit_tracker.services.commit_loader import TransportError


NOW = datetime(2020, 6, 23, 10, 15, tzinfo=timezone.utc)


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def mock_fetch():
    """Mock the Commit Loader behind the configurable timeline."""
    with patch('commit_tracker.api.widget.commit_timeline.loader') as mock_loader:
        mock_loader.fetch = AsyncMock(
            return_value=Commit(message="Fixed stuff", author="John Appleseed", date="2020-06-23")
        )
        yield mock_loader.fetch


def test_timeline_success(client, mock_fetch):
    """Test a refresh cycle through the API."""
    response = client.get(
        "/api/widget/timeline",
        params={"account": "apple", "repo": "swift", "branch": "master"}
    )
    
    assert response.status_code == 200
    data = response.json()
    assert len(data["entries"]) == 1
    entry = data["entries"][0]
    assert entry["commit"] == {
        "message": "Fixed stuff",
        "author": "John Appleseed",
        "date": "2020-06-23",
    }
    assert entry["identity"] == {"account": "apple", "repository": "swift", "branch": "master"}
    assert entry["failure"] is None
    
    observed_at = datetime.fromisoformat(entry["observed_at"].replace("Z", "+00:00"))
    refresh_after = datetime.fromisoformat(data["refresh_after"].replace("Z", "+00:00"))
    assert refresh_after - observed_at == timedelta(minutes=5)


def test_timeline_missing_configuration(client, mock_fetch):
    """Test missing parameters never reach GitHub."""
    response = client.get("/api/widget/timeline", params={"account": "apple"})
    
    assert response.status_code == 200
    entry = response.json()["entries"][0]
    assert entry["commit"]["message"] == "Failed to load commits"
    assert entry["identity"] == {"account": "???", "repository": "???", "branch": "???"}
    assert entry["failure"] == "missing_configuration"
    mock_fetch.assert_not_called()


def test_timeline_transport_failure(client, mock_fetch):
    """Test a GitHub failure still returns a renderable record."""
    mock_fetch.side_effect = TransportError("GitHub returned 404")
    
    response = client.get(
        "/api/widget/timeline",
        params={"account": "apple", "repo": "swift", "branch": "no-such-branch"}
    )
    
    assert response.status_code == 200
    entry = response.json()["entries"][0]
    assert entry["commit"] == {"message": "Failed to load commits", "author": "", "date": ""}
    assert entry["identity"]["branch"] == "no-such-branch"
    assert entry["failure"] == "transport"


def test_timeline_unexpected_error(client):
    """Test unexpected errors map to 500."""
    with patch('commit_tracker.api.widget.commit_timeline') as mock_timeline:
        mock_timeline.get_timeline = AsyncMock(side_effect=RuntimeError("boom"))
        
        response = client.get("/api/widget/timeline")
    
    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"


def test_fixed_timeline(client):
    """Test the fixed variant tracks its own repository."""
    record = DisplayRecord(
        observed_at=NOW,
        commit=FAILED_COMMIT,
        identity=RepositoryIdentity(account="apple", repository="swift", branch="master"),
    )
    timeline = Timeline(entries=[record], refresh_after=NOW + timedelta(minutes=5))
    
    with patch('commit_tracker.api.widget.fixed_timeline') as mock_timeline:
        mock_timeline.get_timeline = AsyncMock(return_value=timeline)
        
        response = client.get("/api/widget/timeline/fixed")
    
    assert response.status_code == 200
    assert response.json()["entries"][0]["identity"]["repository"] == "swift"
    mock_timeline.get_timeline.assert_awaited_once_with()


def test_placeholder(client):
    response = client.get("/api/widget/placeholder")
    
    assert response.status_code == 200
    data = response.json()
    assert data["commit"] == {"message": "message", "author": "author", "date": "date"}
    assert data["identity"] == {"account": "account", "repository": "repo", "branch": "branch"}


def test_snapshot(client):
    response = client.get("/api/widget/snapshot")
    
    assert response.status_code == 200
    data = response.json()
    assert data["commit"]["author"] == "John Appleseed"
    assert data["identity"] == {"account": "apple", "repository": "swift", "branch": "master"}


def test_render(client, mock_fetch):
    """Test the plain-text widget rendering."""
    response = client.get(
        "/api/widget/render",
        params={"account": "apple", "repo": "swift", "branch": "master"}
    )
    
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    lines = response.text.splitlines()
    assert lines[0] == "apple/swift's master Latest Commit"
    assert lines[1] == "Fixed stuff"
    assert lines[2] == "by John Appleseed at 2020-06-23"
    assert lines[3].startswith("Updated at ")
