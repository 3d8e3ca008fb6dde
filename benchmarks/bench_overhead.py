"""
Microbenchmark: cost per enter/leave pair, active vs disabled engine.
Run:
  python benchmarks/bench_overhead.py
"""
import time

from miniprof import ActiveProfiler, NullProfiler


def run(prof, n: int, frames: int = 20):
    # warmup
    for _ in range(100):
        with prof.scope("warmup"):
            pass

    t0 = time.perf_counter()
    for _ in range(frames):
        prof.begin_cycle()
        for _ in range(n):
            prof.enter("segment")
            prof.leave()
    t1 = time.perf_counter()
    return (t1 - t0) / (frames * n)


if __name__ == "__main__":
    for n in [100, 1_000, 10_000]:
        active = run(ActiveProfiler(strict=False), n)
        null = run(NullProfiler(), n)
        print(f"N={n:6d}  active={1e9*active:8.1f} ns/pair  disabled={1e9*null:8.1f} ns/pair")

    prof = ActiveProfiler()
    run(prof, 1_000, frames=1)
    print(prof.report().splitlines()[-2])
