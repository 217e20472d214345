"""Benchmark: authorize() latency — per-call p50/p99.

Measures the per-call latency of authorize() against a tree built from a
realistic role + direct block sequence, for a deep resource request that
has to walk most of the candidate paths before a decision.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from permission_tree.authorization.authorizer import authorize
from permission_tree.tree.builder import PermissionTree, parse_permissions

_WARMUP: int = 100
_ITERATIONS: int = 5_000
_PROJECT_COUNT: int = 50
_REQUEST: str = "access@projects:p7:prototype:files:readme"


def _make_tree(projects: int) -> PermissionTree:
    """Build a two-block tree with one deny and one grant per project."""
    role = ["access@projects", "read@reports"]
    direct: list[str] = []
    for i in range(projects):
        direct.append(f"-access@projects:p{i}")
        direct.append(f"+access@projects:p{i}:prototype")
    return parse_permissions([role, direct])


def bench_authorize_latency() -> dict[str, object]:
    """Benchmark authorize() per-call latency.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p50_latency_ms, p99_latency_ms.
    """
    tree = _make_tree(_PROJECT_COUNT)

    for _ in range(_WARMUP):
        authorize(tree, _REQUEST)

    latencies_ms: list[float] = []
    for _ in range(_ITERATIONS):
        t0 = time.perf_counter()
        authorize(tree, _REQUEST)
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": "authorize_latency",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p50_latency_ms": round(sorted_lats[n // 2], 4),
        "p99_latency_ms": round(sorted_lats[min(int(n * 0.99), n - 1)], 4),
    }
    print(
        f"[bench_authorize_latency] {result['operation']}: "
        f"p99={result['p99_latency_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_authorize_latency()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "authorize_latency.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
