"""Benchmark: parse_permissions() throughput.

Builds a tree from a block sequence shaped like a user with a handful of
roles and a direct block, which is what a host rebuilds on every request.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from permission_tree.tree.builder import parse_permissions

_ITERATIONS: int = 1_000
_ROLE_COUNT: int = 5
_STATEMENTS_PER_BLOCK: int = 40


def _make_blocks() -> list[list[str]]:
    blocks: list[list[str]] = []
    for role in range(_ROLE_COUNT + 1):
        action = "-" if role % 2 else "+"
        blocks.append(
            [
                f"{action}perm{i % 7}@app{i % 3}:res{i}:sub{role}"
                for i in range(_STATEMENTS_PER_BLOCK)
            ]
        )
    return blocks


def bench_build_throughput() -> dict[str, object]:
    """Benchmark parse_permissions() over a fixed block sequence."""
    blocks = _make_blocks()

    start = time.perf_counter()
    for _ in range(_ITERATIONS):
        parse_permissions(blocks)
    total = time.perf_counter() - start

    result: dict[str, object] = {
        "operation": "build_throughput",
        "iterations": _ITERATIONS,
        "statements_per_build": _STATEMENTS_PER_BLOCK * (_ROLE_COUNT + 1),
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(total / _ITERATIONS * 1000, 4),
    }
    print(
        f"[bench_build_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} builds/sec"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_build_throughput()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "build_throughput.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
