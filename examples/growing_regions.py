"""
Static bubbles whose regions of influence grow on a schedule.

A custom interaction rule reports the moment two regions first touch. The
composite tree finds every pair without checking them one by one.
"""
import logging
import math

from bubble_sim.bubbles.bodies import StaticBubble
from bubble_sim.bubbles.composite import register_composite_interactions
from bubble_sim.functions import DEFAULT_ADDER, Constant, Linear, Quadratic
from bubble_sim.simulation import Simulation
from bubble_sim.solvers.interaction import InteractionSolver

logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
log = logging.getLogger("growing_regions")


class Region(StaticBubble):
    def __init__(self, name, position, radius):
        super().__init__(position, radius)
        self.name = name
        self.touched = set()


def touch_time(a, b, t):
    """Regions touch once their radii sum to their separation, and only once."""
    if b.name in a.touched:
        return math.inf
    separation = a.position.similarity(b.position)
    reach = DEFAULT_ADDER.sum_many((a.boundary_radius, b.boundary_radius, Constant(-separation)))
    root = reach.root()
    return math.inf if root is None else max(t, root)


def touch(a, b, t):
    when = touch_time(a, b, t)
    if math.isinf(when):
        return
    a.remeasure(when)
    b.remeasure(when)
    a.touched.add(b.name)
    b.touched.add(a.name)
    log.info("%s touches %s at t=%.3f", a.name, b.name, when)


solver = InteractionSolver()
solver.add_interaction(Region, Region, touch_time, touch)
register_composite_interactions(solver)

sim = Simulation(solver=solver)
sim.add_bubble(Region("north", (0.0, 10.0), Linear(1.0, 0.0)))
sim.add_bubble(Region("south", (0.0, -10.0), Linear(0.5, 1.0)))
sim.add_bubble(Region("east", (12.0, 0.0), Quadratic(0.1, 0.0, 0.0)))
sim.add_bubble(Region("west", (-30.0, 0.0), Linear(2.0, 0.0)))

for t in range(0, 25, 5):
    events = sim.advance_to(float(t))
    print(f"t={t:3d}  events={events}  next={sim.next_event_time():.3f}")
