"""Benchmark: ResourcePermission.implies throughput — checks per second.

Measures how many ResourcePermissionSet.check() calls can be completed per
second against a grant set mixing path-prefix, extension, carve-out and
exception-list permissions.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from aumos_resource_permissions.permissions.permission_set import (
    ResourcePermissionSet,
)
from aumos_resource_permissions.permissions.resource_permission import (
    ResourcePermission,
)

_ITERATIONS: int = 10_000


def _make_grants() -> ResourcePermissionSet:
    """Build a realistic grant set for benchmarking."""
    return ResourcePermissionSet(
        [
            ResourcePermission("/admin/*:/admin/public/*:/admin/health", "GET,POST"),
            ResourcePermission("/api/v1/*:/api/v1/internal/*", "GET,POST,PUT"),
            ResourcePermission("*.jsp:/private/*", "GET,HEAD"),
            ResourcePermission("/reports/*", "!DELETE,PUT"),
            ResourcePermission("/", "GET"),
        ]
    )


def bench_implies_throughput() -> dict[str, object]:
    """Benchmark ResourcePermissionSet.check() throughput.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    grants = _make_grants()
    requests = [
        ("/admin/users", "POST"),
        ("/api/v1/internal/keys", "GET"),
        ("/pages/index.jsp", "HEAD"),
        ("/reports/q3", "GET"),
    ]

    start = time.perf_counter()
    for index in range(_ITERATIONS):
        name, method = requests[index % len(requests)]
        grants.check(name, method)
    total = time.perf_counter() - start

    result: dict[str, object] = {
        "operation": "resource_permission_check_throughput",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(total / _ITERATIONS * 1000, 4),
    }
    print(
        f"[bench_implies_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_implies_throughput()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "implies_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
