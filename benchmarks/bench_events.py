"""
Microbenchmark: time per resolved event vs number of bodies.
Run:
  python benchmarks/bench_events.py
"""
import time

import numpy as np

from bubble_sim.bubbles.bodies import AcceleratingBody
from bubble_sim.profiler import Profiler
from bubble_sim.simulation import Simulation


def run(n: int, horizon: float = 5.0):
    prof = Profiler()
    sim = Simulation(profiler=prof)

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)

    # spawn bodies on a grid with small random jitter and random velocities
    side = int(np.ceil(np.sqrt(n)))
    k = 0
    for iy in range(side):
        for ix in range(side):
            if k >= n:
                break
            x = 1.0 * ix + 0.05 * float(rng.normal())
            y = 1.0 * iy + 0.05 * float(rng.normal())
            v = rng.normal(size=2)
            sim.add_bubble(AcceleratingBody(0.2, position=(x, y), velocity=v, restitution=0.9))
            k += 1

    t0 = time.perf_counter()
    sim.advance_to(horizon)
    t1 = time.perf_counter()

    total = t1 - t0
    per_event = total / max(1, sim.events)
    return total, sim.events, per_event, prof.stats.summary()


if __name__ == "__main__":
    for n in [4, 16, 64, 128]:
        total, events, per_event, summary = run(n)
        print(f"N={n:4d}  total={1e3*total:9.2f} ms  events={events:6d}  per_event={1e3*per_event:7.3f} ms")
        for k in ["events", "state"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
