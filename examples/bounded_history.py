# examples/bounded_history.py
# Long-running loop that keeps a bounded history and flushes it periodically.
import sys

import numpy as np

from miniprof import ActiveProfiler

prof = ActiveProfiler(max_frames=120)
rng = np.random.default_rng(12345)

for i in range(600):
    prof.begin_cycle()
    with prof.scope("solve"):
        a = rng.normal(size=(32, 32))
        np.linalg.solve(a, np.ones(32))
    with prof.scope("sort"):
        np.sort(rng.random(4096))
    if i % 200 == 199:
        prof.flush(sys.stdout)
