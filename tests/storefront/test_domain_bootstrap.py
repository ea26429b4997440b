"""The domain must initialise on its own, before any HTTP module is imported."""

import os
import subprocess
import sys
from pathlib import Path

SRC = Path(__file__).resolve().parents[2] / "src"

BOOTSTRAP = """
import sys
from storefront.domain import storefront
storefront.init()
assert "storefront.api.users" in sys.modules
print(sorted(record.cls.__name__ for record in storefront.registry.aggregates.values()))
"""


def test_domain_initialises_in_a_fresh_interpreter():
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC), env.get("PYTHONPATH")]))
    env["PROTEAN_ENV"] = "test"

    result = subprocess.run(
        [sys.executable, "-c", BOOTSTRAP],
        capture_output=True,
        text=True,
        env=env,
        cwd=SRC,
        timeout=120,
    )

    assert result.returncode == 0, result.stderr
    for name in ("Category", "Notification", "Order", "Product", "ShoppingCart", "User"):
        assert name in result.stdout
