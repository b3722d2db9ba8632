# examples/energy_sweep.py
import numpy as np
from hookes_law.model import EnergyModel
from hookes_law.renderer import BufferedRenderer

model = EnergyModel()
renderer = BufferedRenderer()

for x in np.linspace(-1.0, 1.0, 11):
    model.spring.set_displacement(x)
    renderer.render_system(model.system)

data = renderer.as_arrays()["energy_spring"]
for x, e in zip(data["displacement"], data["potential_energy"]):
    print(f"x={x:+.2f} m  E={e:6.2f} J")
