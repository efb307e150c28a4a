"""Host vitals from psutil, with a short time-based cache."""

import logging
import random
import socket
import threading
import time
from pathlib import Path
from typing import Callable, Optional

import psutil

from common.constants import (
    FALLBACK_IP_ADDRESS,
    SYSTEM_INFO_CACHE_SECONDS,
    THERMAL_ZONE_PATH,
)
from hub import config
from hub.schemas.system import SystemInfoResponse
from hub.utils import current_millis, format_uptime

logger = logging.getLogger(__name__)

FALLBACK_ERROR = "Could not fetch real system data"


def get_local_ip() -> str:
    """
    Find the LAN address of this host.

    Returns:
        First IPv4 address of an interface that is up and not loopback,
        or 127.0.0.1 if there is none
    """
    try:
        addresses = psutil.net_if_addrs()
        stats = psutil.net_if_stats()
    except Exception as e:
        logger.debug(f"Interface lookup failed: {e}")
        return FALLBACK_IP_ADDRESS

    for name, entries in addresses.items():
        interface_stats = stats.get(name)
        if interface_stats is None or not interface_stats.isup:
            continue
        for entry in entries:
            if entry.family != socket.AF_INET:
                continue
            if entry.address.startswith('127.'):
                continue
            return entry.address

    return FALLBACK_IP_ADDRESS


def read_cpu_temperature(thermal_zone: str = THERMAL_ZONE_PATH) -> float:
    """
    Read the CPU temperature in degrees Celsius.

    Prefers the kernel thermal zone (Raspberry Pi and most Linux boards), then
    psutil sensors. Returns 0 when no sensor is available and a simulated
    45-60 value when reading fails.
    """
    try:
        zone = Path(thermal_zone)
        if zone.exists():
            return int(zone.read_text().strip()) / 1000

        sensors = getattr(psutil, 'sensors_temperatures', None)
        if sensors is None:
            return 0.0
        for readings in sensors().values():
            for reading in readings:
                if reading.current:
                    return float(reading.current)
        return 0.0
    except Exception as e:
        logger.debug(f"Temperature read failed, using simulated value: {e}")
        return 45 + random.random() * 15


class SystemInfoService:
    """
    Collects host vitals and caches successful snapshots.

    Thread-safe: FastAPI runs the system-info route in its threadpool, so
    concurrent requests share the cache under a lock.
    """

    def __init__(
        self,
        cache_seconds: float = SYSTEM_INFO_CACHE_SECONDS,
        disk_path: Optional[str] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        self.cache_seconds = cache_seconds
        self.disk_path = disk_path if disk_path is not None else config.DISK_USAGE_PATH
        self._clock = clock
        self._lock = threading.Lock()
        self._cache: Optional[SystemInfoResponse] = None
        self._cached_at = 0.0

        # First cpu_percent(None) call only primes the counters.
        psutil.cpu_percent(interval=None)

    def get_system_info(self) -> SystemInfoResponse:
        """
        Return the current snapshot, from cache when it is fresh.

        Returns:
            Real snapshot, or a simulated one carrying an error field when
            collection fails (simulated snapshots are not cached)
        """
        with self._lock:
            now = self._clock()
            if self._cache is not None and (now - self._cached_at) < self.cache_seconds:
                return self._cache

            try:
                snapshot = self._collect()
            except Exception as e:
                logger.error(f"Error getting system info: {e}", exc_info=True)
                return self._fallback()

            self._cache = snapshot
            self._cached_at = now
            return snapshot

    def _collect(self) -> SystemInfoResponse:
        cpu_usage = psutil.cpu_percent(interval=None) or 0.0
        memory = psutil.virtual_memory()
        memory_usage = memory.percent or 0.0
        disk = psutil.disk_usage(self.disk_path)
        disk_usage = (disk.used / disk.total) * 100 if disk.total else 0.0
        uptime_seconds = max(0.0, time.time() - psutil.boot_time())

        return SystemInfoResponse(
            ip_address=get_local_ip(),
            cpu_usage=round(cpu_usage, 1),
            memory_usage=round(memory_usage, 1),
            disk_usage=round(disk_usage, 1),
            temperature=round(read_cpu_temperature(), 1),
            uptime=format_uptime(uptime_seconds),
            timestamp=current_millis(),
        )

    def _fallback(self) -> SystemInfoResponse:
        return SystemInfoResponse(
            ip_address=get_local_ip(),
            cpu_usage=round(random.random() * 100, 1),
            memory_usage=round(35 + random.random() * 20, 1),
            disk_usage=round(42 + random.random() * 10, 1),
            temperature=round(45 + random.random() * 15, 1),
            uptime="0d 0h 0m",
            timestamp=current_millis(),
            error=FALLBACK_ERROR,
        )
