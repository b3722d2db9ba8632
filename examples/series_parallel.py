# examples/series_parallel.py
from hookes_law import SeriesSystem, ParallelSystem
from hookes_law.renderer import DebugRenderer

renderer = DebugRenderer(verbose=True)

series = SeriesSystem()
series.set_applied_force(50)                    # same force in both springs
series.top_spring.set_spring_constant(400)      # force held, displacements change
renderer.render_system(series)

parallel = ParallelSystem()
parallel.set_displacement(0.25)                 # same displacement in both springs
parallel.bottom_spring.set_spring_constant(300) # displacement held, forces change
renderer.render_system(parallel)
