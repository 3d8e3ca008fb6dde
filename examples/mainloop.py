# examples/mainloop.py
# One frame per loop iteration, segments keyed by call site.
import time

import miniprof

for _ in range(100):
    miniprof.frame()
    with miniprof.scope("mainloop"):
        miniprof.enter("alpha")
        time.sleep(300e-6)
        miniprof.leave("alpha")

        miniprof.enter("bravo")
        time.sleep(500e-6)
        miniprof.leave("bravo")

        miniprof.enter("baseline")
        miniprof.leave("baseline")

print(miniprof.data())
