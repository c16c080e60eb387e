import time
from typing import Any, Callable, Dict

import structlog
from django.apps import apps
from django.core.cache import cache
from django.db import connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger(__name__)

HEALTH_CACHE_KEY = "_health_check"


def _check_database() -> None:
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()


def _check_cache() -> None:
    cache.set(HEALTH_CACHE_KEY, "ok", 10)
    if cache.get(HEALTH_CACHE_KEY) != "ok":
        raise ConnectionError("Cache read failed")


def _check_catalog() -> None:
    # Fails if the products table is missing or unreadable.
    apps.get_model("catalog", "ProductRecord").objects.exists()


HEALTH_CHECKS: Dict[str, Callable[[], None]] = {
    "database": _check_database,
    "cache": _check_cache,
    "catalog": _check_catalog,
}


def _run_check(name: str, check: Callable[[], None], log) -> Dict[str, Any]:
    start = time.monotonic()
    try:
        check()
    except Exception as exc:
        log.error("health_check_failed", service=name, error=str(exc))
        return {"status": "down"}
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    """Report database, cache and catalog storage reachability.

    Returns 503 when any check is down.
    """
    log = logger.bind(correlation_id=getattr(request, "correlation_id", ""))
    services = {
        name: _run_check(name, check, log) for name, check in HEALTH_CHECKS.items()
    }
    healthy = all(service["status"] == "up" for service in services.values())
    overall = "healthy" if healthy else "unhealthy"

    log.info("health_check_completed", status=overall)

    return JsonResponse(
        {
            "status": overall,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )
