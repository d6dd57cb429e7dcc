"""
zenflow.services.client_context — Vote metadata enrichment
===========================================================

Derives the contextual metadata stored alongside each vote record:

* the client IP (which also keys the one-vote-per-style rule),
* a coarse device / browser / OS classification from ``User-Agent``,
* an optional country / region / city lookup over HTTP.

Geo lookup is best-effort: private addresses are never sent out, and any
failure yields an empty :class:`GeoInfo` plus a warning.  A vote is never
rejected because enrichment failed.
"""

from __future__ import annotations

import ipaddress
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from zenflow.config import ZenflowConfig

logger = logging.getLogger(__name__)

UNKNOWN_IP = "unknown"


@dataclass(frozen=True, slots=True)
class DeviceInfo:
    type: str | None = None     # mobile / tablet / desktop
    browser: str | None = None
    os: str | None = None


@dataclass(frozen=True, slots=True)
class GeoInfo:
    country: str | None = None
    region: str | None = None
    city: str | None = None


@dataclass(slots=True)
class VoteContext:
    """Everything recorded about the client that cast a vote."""

    user_ip: str = UNKNOWN_IP
    device: DeviceInfo = field(default_factory=DeviceInfo)
    geo: GeoInfo = field(default_factory=GeoInfo)
    session: dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# IP
# ---------------------------------------------------------------------------
def client_ip(headers: Mapping[str, str], peer: str | None = None) -> str:
    """Resolve the originating client address.

    Order: first hop of ``X-Forwarded-For``, then ``X-Real-IP``, then the
    socket *peer*.  Returns ``"unknown"`` when nothing usable is present.
    """
    forwarded = headers.get("x-forwarded-for", "")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = headers.get("x-real-ip", "").strip()
    if real_ip:
        return real_ip

    if peer:
        return peer
    return UNKNOWN_IP


def is_public_ip(ip: str) -> bool:
    try:
        addr = ipaddress.ip_address(ip)
    except ValueError:
        return False
    return addr.is_global


# ---------------------------------------------------------------------------
# User-Agent
# ---------------------------------------------------------------------------
def _device_type(ua: str) -> str:
    if "ipad" in ua or "tablet" in ua or ("android" in ua and "mobile" not in ua):
        return "tablet"
    if "mobi" in ua or "iphone" in ua or "ipod" in ua:
        return "mobile"
    return "desktop"


def _browser(ua: str) -> str:
    # Order matters: Edge and Opera also advertise Chrome and Safari.
    if "edg/" in ua or "edga/" in ua or "edgios/" in ua:
        return "Edge"
    if "opr/" in ua or "opera" in ua:
        return "Opera"
    if "firefox/" in ua or "fxios/" in ua:
        return "Firefox"
    if "chrome/" in ua or "crios/" in ua:
        return "Chrome"
    if "safari/" in ua:
        return "Safari"
    return "Other"


def _os(ua: str) -> str:
    if "windows" in ua:
        return "Windows"
    if "iphone" in ua or "ipad" in ua or "ipod" in ua:
        return "iOS"
    if "mac os x" in ua or "macintosh" in ua:
        return "macOS"
    if "android" in ua:
        return "Android"
    if "linux" in ua:
        return "Linux"
    return "Other"


def parse_user_agent(user_agent: str | None) -> DeviceInfo:
    """Classify a ``User-Agent`` header.  Empty input yields all ``None``."""
    if not user_agent or not user_agent.strip():
        return DeviceInfo()
    ua = user_agent.lower()
    return DeviceInfo(type=_device_type(ua), browser=_browser(ua), os=_os(ua))


# ---------------------------------------------------------------------------
# Geo
# ---------------------------------------------------------------------------
async def lookup_geo(
    ip: str,
    cfg: ZenflowConfig,
    *,
    client: httpx.AsyncClient | None = None,
) -> GeoInfo:
    """Resolve *ip* to a coarse location using ``cfg.geo_lookup_url``.

    Disabled lookups, non-public addresses and every transport or payload
    error return an empty :class:`GeoInfo`.
    """
    if not cfg.geo_lookup_enabled or not is_public_ip(ip):
        return GeoInfo()

    url = cfg.geo_lookup_url.format(ip=ip)
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=cfg.geo_lookup_timeout_seconds) as own:
                resp = await own.get(url)
        else:
            resp = await client.get(url, timeout=cfg.geo_lookup_timeout_seconds)
        resp.raise_for_status()
        data = resp.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Geo lookup failed for %s: %s", ip, exc)
        return GeoInfo()

    if not isinstance(data, dict) or data.get("status", "success") != "success":
        logger.warning("Geo lookup returned no result for %s", ip)
        return GeoInfo()

    return GeoInfo(
        country=data.get("country") or data.get("country_name"),
        region=data.get("regionName") or data.get("region"),
        city=data.get("city"),
    )


def session_metadata(headers: Mapping[str, str], extra: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Collect request-level session metadata for the vote row."""
    meta: dict[str, Any] = {
        "user_agent": headers.get("user-agent"),
        "referrer": headers.get("referer"),
        "language": headers.get("accept-language"),
    }
    if extra:
        meta.update({k: v for k, v in extra.items() if v is not None})
    return {k: v for k, v in meta.items() if v is not None}


async def build_vote_context(
    headers: Mapping[str, str],
    peer: str | None,
    cfg: ZenflowConfig,
    *,
    extra_session: Mapping[str, Any] | None = None,
) -> VoteContext:
    """Assemble a :class:`VoteContext` for the current request."""
    ip = client_ip(headers, peer)
    return VoteContext(
        user_ip=ip,
        device=parse_user_agent(headers.get("user-agent")),
        geo=await lookup_geo(ip, cfg),
        session=session_metadata(headers, extra_session),
    )
