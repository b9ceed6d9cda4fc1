"""Tests for the config sanitizer."""

from datetime import datetime, timezone

from relay.models import ErrorRecord, GatewayStats
from relay.sanitizer import build_config_snapshot, dig, plugin_names, safe_channels

HOST_CONFIG = {
    "meta": {"lastTouchedVersion": "2026.1.5"},
    "agents": {
        "defaults": {
            "workspace": "/srv/agent",
            "model": "opus",
            "thinking": "low",
            "heartbeat": {"every": "30m"},
            "compaction": "auto",
        }
    },
    "channels": {
        "telegram": {"botToken": "123:SECRET", "dmPolicy": "pairing", "streamMode": "partial"},
        "discord": {"token": "SECRET", "enabled": False, "groupPolicy": "open"},
        "slack": None,
    },
    "plugins": {
        "entries": {
            "memory": {"enabled": True, "apiKey": "SECRET"},
            "voice": {"enabled": False},
            "relay": {},
        }
    },
    "gateway": {"port": 18789, "mode": "local", "auth": {"token": "SECRET"}},
    "crons": {"jobs": [{"id": "j1", "schedule": "0 * * * *", "text": "x" * 150}, {"id": "j2", "enabled": False}]},
    "skills": {"available": [{"name": "s", "description": "d", "location": "/l", "secret": "SECRET"}]},
    "tools": {"available": ["read", "exec"]},
    "nodes": {"registered": [{"id": "n1", "name": "mac", "type": "macos", "lastSeen": 1, "status": "up", "token": "SECRET"}]},
}


def stats():
    return GatewayStats(
        uptime_seconds=5,
        started_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        error_count=1,
        recent_errors=[ErrorRecord(datetime(2026, 1, 1, tzinfo=timezone.utc), "boom", "shell")],
    )


class TestHelpers:
    """Tests for sanitizer helpers."""

    def test_dig(self):
        """Test nested lookups tolerate missing levels."""
        assert dig(HOST_CONFIG, "gateway", "port") == 18789
        assert dig(HOST_CONFIG, "gateway", "missing", "deeper") is None
        assert dig(None, "a") is None

    def test_safe_channels(self):
        """Test that only policies are copied and enabled defaults to True."""
        assert safe_channels(HOST_CONFIG["channels"]) == {
            "telegram": {"enabled": True, "dmPolicy": "pairing", "groupPolicy": None, "streamMode": "partial"},
            "discord": {"enabled": False, "dmPolicy": None, "groupPolicy": "open", "streamMode": None},
        }
        assert safe_channels(None) == {}

    def test_plugin_names(self):
        """Test that explicitly disabled plugins are excluded."""
        assert plugin_names(HOST_CONFIG["plugins"]) == ["memory", "relay"]
        assert plugin_names({}) == []


class TestBuildConfigSnapshot:
    """Tests for build_config_snapshot()."""

    def test_snapshot_fields(self):
        """Test the projected shape."""
        snapshot = build_config_snapshot(HOST_CONFIG, stats())

        assert snapshot["version"] == "2026.1.5"
        assert snapshot["workspace"] == "/srv/agent"
        assert snapshot["gateway"] == {"port": 18789, "mode": "local"}
        assert snapshot["agents"]["model"] == "opus"
        assert snapshot["crons"][0]["text"] == "x" * 100
        assert snapshot["crons"][0]["enabled"] is True
        assert snapshot["crons"][1]["enabled"] is False
        assert snapshot["tools"] == ["read", "exec"]
        assert snapshot["nodes"][0]["status"] == "up"
        assert snapshot["memory"] == {"enabled": True, "workspace": "/srv/agent"}
        assert snapshot["gateway_stats"]["recent_errors"][0]["tool"] == "shell"

    def test_no_secrets_leak(self):
        """Test that no credential value survives the projection."""
        snapshot = build_config_snapshot(HOST_CONFIG, stats())
        assert "SECRET" not in repr(snapshot)

    def test_empty_config(self):
        """Test defaults for a host with no config."""
        snapshot = build_config_snapshot(None, stats())

        assert snapshot["channels"] == {}
        assert snapshot["plugins"] == []
        assert snapshot["crons"] == []
        assert snapshot["memory"] == {"enabled": False}

    def test_malformed_entries_tolerated(self):
        """Test that scalar and wrongly-typed entries project instead of raising."""
        config = {
            "agents": {"defaults": "opus"},
            "channels": {"telegram": "on", "discord": {"enabled": False}},
            "plugins": {"entries": ["memory"]},
            "crons": {"jobs": ["0 * * * *", {"id": "j1", "text": 42}]},
            "skills": {"available": "all"},
            "nodes": {"registered": [None, {"id": "n1"}]},
        }

        snapshot = build_config_snapshot(config, stats())

        assert snapshot["workspace"] is None
        assert snapshot["agents"]["model"] is None
        assert snapshot["channels"]["telegram"] == {
            "enabled": True,
            "dmPolicy": None,
            "groupPolicy": None,
            "streamMode": None,
        }
        assert snapshot["channels"]["discord"]["enabled"] is False
        assert snapshot["plugins"] == []
        assert snapshot["crons"] == [
            {"id": "j1", "schedule": None, "text": 42, "enabled": True}
        ]
        assert snapshot["skills"] == []
        assert [node["id"] for node in snapshot["nodes"]] == ["n1"]
