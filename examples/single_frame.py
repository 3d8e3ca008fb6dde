# examples/single_frame.py
# All iterations aggregated into one frame.
import time

import miniprof

miniprof.frame()
with miniprof.scope("Frame"):
    for _ in range(100):
        with miniprof.scope("mainloop"):
            with miniprof.scope("alpha"):
                time.sleep(50e-6)
            with miniprof.scope("bravo"):
                time.sleep(200e-6)
            with miniprof.scope("baseline"):
                pass

print(miniprof.data())
