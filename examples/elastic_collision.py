import logging

import numpy as np

from bubble_sim.bubbles.bodies import AcceleratingBody
from bubble_sim.simulation import Simulation

logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

sim = Simulation()

m1, m2 = 1.0, 2.0
a = AcceleratingBody(0.2, mass=m1, position=(-1.0, 0.0), velocity=(+3.0, 0.0), restitution=1.0)
b = AcceleratingBody(0.2, mass=m2, position=(+1.0, 0.0), velocity=(-1.0, 0.0), restitution=1.0)
sim.add_bubble(a)
sim.add_bubble(b)

p0 = m1*a.velocity + m2*b.velocity
ke0 = 0.5*m1*np.dot(a.velocity, a.velocity) + 0.5*m2*np.dot(b.velocity, b.velocity)

print("next event at t =", sim.next_event_time())
events = sim.advance_to(2.5)

p1 = m1*a.velocity + m2*b.velocity
ke1 = 0.5*m1*np.dot(a.velocity, a.velocity) + 0.5*m2*np.dot(b.velocity, b.velocity)

print("events resolved:", events)
print("p0", p0, "p1", p1, "dp", p1-p0)
print("ke0", ke0, "ke1", ke1, "dke", ke1-ke0)
print("v_final a,b:", a.velocity, b.velocity)
print("x_final a,b:", a.displayed_position, b.displayed_position)
