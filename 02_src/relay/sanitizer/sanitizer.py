"""Projection of the host's live config into a secret-free snapshot."""

from collections.abc import Mapping
from typing import Any

from ..models import GatewayStats

CRON_TEXT_LIMIT = 100


def dig(source: Any, *keys: str) -> Any:
    """Follow nested mapping keys, returning None on the first missing level."""
    current = source
    for key in keys:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def _entries(source: Any, *keys: str) -> list[Mapping]:
    """Mapping items of a nested list; anything else in the list is skipped."""
    items = dig(source, *keys)
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, Mapping)]


def safe_channels(channels: Mapping[str, Any] | None) -> dict[str, dict]:
    """Channel policies only; tokens and credentials are never copied."""
    if not isinstance(channels, Mapping):
        return {}

    safe = {}
    for name, config in channels.items():
        if not config:
            continue
        # A non-mapping entry ("telegram": "on") still counts as a channel.
        if not isinstance(config, Mapping):
            config = {}
        enabled = config.get("enabled")
        safe[name] = {
            "enabled": True if enabled is None else enabled,
            "dmPolicy": config.get("dmPolicy"),
            "groupPolicy": config.get("groupPolicy"),
            "streamMode": config.get("streamMode"),
        }
    return safe


def plugin_names(plugins: Mapping[str, Any] | None) -> list[str]:
    """Names of plugins not explicitly disabled."""
    entries = dig(plugins, "entries")
    if not isinstance(entries, Mapping):
        return []
    return [
        name
        for name, config in entries.items()
        if not (isinstance(config, Mapping) and config.get("enabled") is False)
    ]


def _crons(config: Mapping[str, Any]) -> list[dict]:
    jobs = []
    for job in _entries(config, "crons", "jobs"):
        text = job.get("text")
        jobs.append({
            "id": job.get("id"),
            "schedule": job.get("schedule"),
            "text": text[:CRON_TEXT_LIMIT] if isinstance(text, str) else text,
            "enabled": job.get("enabled") is not False,
        })
    return jobs


def _skills(config: Mapping[str, Any]) -> list[dict]:
    return [
        {
            "name": skill.get("name"),
            "description": skill.get("description"),
            "location": skill.get("location"),
        }
        for skill in _entries(config, "skills", "available")
    ]


def _nodes(config: Mapping[str, Any]) -> list[dict]:
    return [
        {
            "id": node.get("id"),
            "name": node.get("name"),
            "type": node.get("type"),
            "lastSeen": node.get("lastSeen"),
            "status": node.get("status"),
        }
        for node in _entries(config, "nodes", "registered")
    ]


def build_config_snapshot(config: Mapping[str, Any] | None, stats: GatewayStats) -> dict:
    """Full-state config sync body for /agents/{agent_id}/config."""
    if not isinstance(config, Mapping):
        config = {}
    defaults = dig(config, "agents", "defaults")
    if not isinstance(defaults, Mapping):
        defaults = {}
    workspace = defaults.get("workspace")

    if dig(config, "plugins", "entries", "memory"):
        memory = {"enabled": True, "workspace": workspace}
    else:
        memory = {"enabled": False}

    return {
        "version": dig(config, "meta", "lastTouchedVersion"),
        "workspace": workspace,
        "channels": safe_channels(config.get("channels")),
        "plugins": plugin_names(config.get("plugins")),
        "gateway": {
            "port": dig(config, "gateway", "port"),
            "mode": dig(config, "gateway", "mode"),
        },
        "agents": {
            "model": defaults.get("model"),
            "thinking": defaults.get("thinking"),
            "heartbeat": defaults.get("heartbeat"),
            "compaction": defaults.get("compaction"),
        },
        "crons": _crons(config),
        "skills": _skills(config),
        "tools": dig(config, "tools", "available") or [],
        "nodes": _nodes(config),
        "gateway_stats": stats.to_dict(),
        "memory": memory,
    }
