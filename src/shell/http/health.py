"""
Health endpoints.

Provides health, readiness and liveness probes for monitoring.

Key behaviors:
- /health: Overall status from all registered checks
- /health/ready: Readiness probe (dependency checks must all pass)
- /health/live: Liveness probe (process alive)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# --- Types ---


class HealthStatus(str, Enum):
    """Health check status values."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


@dataclass
class CheckResult:
    """Result of a single health check."""

    name: str
    status: HealthStatus
    message: str = ""
    latency_ms: float = 0.0
    details: dict[str, Any] = field(default_factory=dict)


class HealthCheck(Protocol):
    """Protocol for health checks."""

    name: str

    def check(self) -> CheckResult:
        """Run the health check and return result."""
        ...


# --- Startup Tracker ---


class StartupTracker:
    """Tracks application startup time for uptime calculation."""

    _start_time: float | None = None

    @classmethod
    def mark_started(cls) -> None:
        cls._start_time = time.time()

    @classmethod
    def get_uptime_seconds(cls) -> float:
        if cls._start_time is None:
            return 0.0
        return time.time() - cls._start_time

    @classmethod
    def is_started(cls) -> bool:
        return cls._start_time is not None


# --- Health Check Registry ---


class HealthCheckRegistry:
    """Registry of health checks to run."""

    def __init__(self) -> None:
        self._checks: list[HealthCheck] = []

    def register(self, check: HealthCheck) -> None:
        self._checks.append(check)

    def run_all(self) -> list[CheckResult]:
        return [check.check() for check in self._checks]

    def clear(self) -> None:
        self._checks = []


_registry = HealthCheckRegistry()


def get_health_registry() -> HealthCheckRegistry:
    """Get the global health check registry."""
    return _registry


# --- Built-in Checks ---


class StartupCheck:
    """Check if application has completed startup."""

    name = "startup"

    def check(self) -> CheckResult:
        if StartupTracker.is_started():
            return CheckResult(
                name=self.name,
                status=HealthStatus.HEALTHY,
                message="Startup complete",
                details={"uptime_seconds": StartupTracker.get_uptime_seconds()},
            )
        return CheckResult(
            name=self.name,
            status=HealthStatus.UNHEALTHY,
            message="Startup not complete",
        )


class ContactStoreCheck:
    """Contact store reachability check."""

    name = "contact_store"

    def __init__(self, probe: Callable[[], Any]) -> None:
        """probe should touch the store and raise on failure."""
        self._probe = probe

    def check(self) -> CheckResult:
        start = time.time()
        try:
            self._probe()
        except Exception as e:
            logger.warning("Contact store check failed: %s", e)
            return CheckResult(
                name=self.name,
                status=HealthStatus.UNHEALTHY,
                message=f"Store error: {e!s}",
                latency_ms=(time.time() - start) * 1000,
            )
        return CheckResult(
            name=self.name,
            status=HealthStatus.HEALTHY,
            message="Store reachable",
            latency_ms=(time.time() - start) * 1000,
        )


# --- FastAPI Router ---


def _overall(results: list[CheckResult]) -> HealthStatus:
    if all(r.status == HealthStatus.HEALTHY for r in results):
        return HealthStatus.HEALTHY
    if any(r.status == HealthStatus.UNHEALTHY for r in results):
        return HealthStatus.UNHEALTHY
    return HealthStatus.DEGRADED


def create_health_router(
    version: str = "0.0.0",
    registry: HealthCheckRegistry | None = None,
) -> APIRouter:
    """
    Create FastAPI router for health endpoints.

    Args:
        version: Application version string
        registry: Health check registry (uses global if None)
    """
    router = APIRouter(tags=["health"])
    reg = registry or get_health_registry()

    @router.get("/health", response_model=None)
    def health_check() -> JSONResponse:
        results = reg.run_all()
        overall = _overall(results)
        response = {
            "status": overall.value,
            "service": "contacts",
            "version": version,
            "uptime_seconds": StartupTracker.get_uptime_seconds(),
            "checks": [
                {
                    "name": r.name,
                    "status": r.status.value,
                    "message": r.message,
                    "latency_ms": r.latency_ms,
                }
                for r in results
            ],
        }
        status_code = (
            status.HTTP_200_OK
            if overall == HealthStatus.HEALTHY
            else status.HTTP_503_SERVICE_UNAVAILABLE
        )
        return JSONResponse(content=response, status_code=status_code)

    @router.get("/health/ready", response_model=None)
    def readiness_check() -> JSONResponse:
        results = reg.run_all()
        is_ready = all(r.status == HealthStatus.HEALTHY for r in results)
        response = {
            "ready": is_ready,
            "checks": [
                {"name": r.name, "status": r.status.value, "message": r.message} for r in results
            ],
        }
        status_code = status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE
        return JSONResponse(content=response, status_code=status_code)

    @router.get("/health/live", response_model=None)
    def liveness_check() -> JSONResponse:
        return JSONResponse(
            content={"alive": True, "uptime_seconds": StartupTracker.get_uptime_seconds()},
            status_code=status.HTTP_200_OK,
        )

    return router


# --- Factory Functions ---


def setup_health_checks(
    store_probe: Callable[[], Any],
    registry: HealthCheckRegistry | None = None,
) -> HealthCheckRegistry:
    """Register the startup and contact store checks."""
    reg = registry or get_health_registry()
    reg.clear()
    reg.register(StartupCheck())
    reg.register(ContactStoreCheck(store_probe))
    return reg


def mark_startup_complete() -> None:
    StartupTracker.mark_started()
