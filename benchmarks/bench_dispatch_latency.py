"""Benchmark: dispatch latency — per-call p50/p99 excluding the subprocess.

Measures CommandDispatcher.execute() against an instant in-process runner,
so the numbers reflect validation, session lookup, argument assembly,
marker parsing and the store round-trips only.
"""
from __future__ import annotations

import asyncio
import json
import sys
import time
from pathlib import Path
from typing import Sequence

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from codex_session_bridge.dispatch.dispatcher import CommandDispatcher
from codex_session_bridge.execution.runner import ExecutionResult
from codex_session_bridge.session.store import SessionStore

_WARMUP: int = 200
_ITERATIONS: int = 5_000


class _InstantRunner:
    """Answers every call immediately with a conversation id marker."""

    async def run(self, command: str, args: Sequence[str]) -> ExecutionResult:
        return ExecutionResult(stdout="ok", stderr="conversation id: bench-conv\n")


async def _measure() -> list[float]:
    dispatcher = CommandDispatcher(SessionStore(), _InstantRunner())
    session_id = await dispatcher.store.create_session()
    request = {"prompt": "benchmark", "sessionId": session_id, "additionalArgs": ["--search"]}

    for _ in range(_WARMUP):
        await dispatcher.execute(request)

    latencies_ms: list[float] = []
    for _ in range(_ITERATIONS):
        t0 = time.perf_counter()
        await dispatcher.execute(request)
        latencies_ms.append((time.perf_counter() - t0) * 1000)
    return latencies_ms


def bench_dispatch_latency() -> dict[str, object]:
    """Benchmark CommandDispatcher.execute() per-call latency on a session.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p50_latency_ms, p99_latency_ms.
    """
    latencies_ms = asyncio.run(_measure())

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": "dispatch_latency",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p50_latency_ms": round(sorted_lats[n // 2], 4),
        "p99_latency_ms": round(sorted_lats[min(int(n * 0.99), n - 1)], 4),
    }
    print(
        f"[bench_dispatch_latency] {result['operation']}: "
        f"p50={result['p50_latency_ms']:.4f}ms  "
        f"p99={result['p99_latency_ms']:.4f}ms"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_dispatch_latency()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "dispatch_latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
