# SPDX-License-Identifier: MIT
# Client for the OneBusAway regions directory.
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, List, Optional

import aiohttp

from .exceptions import DirectoryUnreachable, EmptyDirectory, NetworkUnavailable
from .models import RegionRecord, parse_region_list

LOGGER = logging.getLogger("custom_components.oba_regions.pyoba.directory")

DEFAULT_DIRECTORY_URL = "https://regions.onebusaway.org/regions-v3.json"
DEFAULT_TIMEOUT = 30  # seconds


class RegionDirectoryClient:
    def __init__(
        self,
        directory_url: str = DEFAULT_DIRECTORY_URL,
        session: Optional[aiohttp.ClientSession] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._directory_url = directory_url
        self._session = session
        self._own_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._logger = logger or LOGGER

        self._logger.debug("RegionDirectoryClient init: url=%s", self._directory_url)

    @property
    def directory_url(self) -> str:
        return self._directory_url

    # ---- Session helpers ----
    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._own_session = True
        return self._session

    async def aclose(self) -> None:
        if self._own_session and self._session and not self._session.closed:
            await self._session.close()

    # ---- Directory ----
    async def _get_text(self) -> tuple[int, str]:
        ses = await self._ensure_session()
        try:
            async with ses.get(self._directory_url, timeout=self._timeout) as resp:
                status = resp.status
                body = (await resp.read()).decode("utf-8", errors="replace")
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            self._logger.info("GET %s failed: %s", self._directory_url, err)
            raise NetworkUnavailable(f"directory request failed: {err}") from err

        if body and status >= 400:
            self._logger.info("HTTP GET %s -> %s; body: %s", self._directory_url, status, body[:200])
        else:
            self._logger.info("GET %s -> %s", self._directory_url, status)
        return status, body

    async def fetch_raw_regions(self) -> List[Any]:
        """Return the raw record list, accepting a bare array or a wrapped one."""
        status, body = await self._get_text()
        if not 200 <= status < 300:
            raise DirectoryUnreachable(status)

        try:
            data = json.loads(body) if body else None
        except ValueError:
            self._logger.warning("Directory body is not JSON")
            return []

        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            if isinstance(data.get("regions"), list):
                return data["regions"]
            inner = data.get("data")
            if isinstance(inner, dict) and isinstance(inner.get("list"), list):
                return inner["list"]
        self._logger.warning("Unrecognised directory payload: %s", type(data).__name__)
        return []

    async def fetch_regions(self) -> List[RegionRecord]:
        raw_list = await self.fetch_raw_regions()
        regions = parse_region_list(raw_list)
        if not regions:
            raise EmptyDirectory(f"no usable region among {len(raw_list)} records")
        self._logger.debug("Directory returned %d regions (%d raw)", len(regions), len(raw_list))
        return regions

    # ---- Context manager ----
    async def __aenter__(self) -> "RegionDirectoryClient":
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
