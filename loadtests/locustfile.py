"""Storefront Load Testing - Locust entry point.

Usage:
    # All scenarios (web UI):
    ADMIN_PASSWORD=... locust -f loadtests/locustfile.py

    # Checkout contention only:
    locust -f loadtests/locustfile.py LastUnitUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py ShopperUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest

The target server must have bootstrapped its admin account with the same
ADMIN_EMAIL / ADMIN_PASSWORD so scenarios can seed the catalog.
"""

import logging
import time

from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.storefront import LastUnitUser, ShopperUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Print a short summary of checkout outcomes."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    stats = environment.stats
    for name in ("POST /orders", "POST /orders (contended)"):
        entry = stats.get(name, "POST")
        if entry.num_requests:
            print(f"[LOADTEST] {name}: {entry.num_requests} requests, {entry.num_failures} failures")
    print()
