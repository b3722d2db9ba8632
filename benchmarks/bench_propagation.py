"""
Microbenchmark: time per setter call vs system topology.
Run:
  python benchmarks/bench_propagation.py
"""
import numpy as np
from hookes_law import SingleSpringSystem, SeriesSystem, ParallelSystem
from hookes_law.core.invariants import check_system
from hookes_law.errors import RangeError
from hookes_law.profiler import Profiler


def run(system, calls: int = 2000):
    prof = Profiler()
    prof.watch(system)
    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)

    eq = system.equivalent_spring
    # the equivalent of a two-spring system has no settable k
    stiffness_targets = system.springs
    forces = rng.uniform(system.applied_force_range.min, system.applied_force_range.max, calls)
    displacements = rng.uniform(system.displacement_range.min, system.displacement_range.max, calls)

    rejected = 0
    for i in range(calls):
        try:
            with prof.section("set_applied_force"):
                eq.set_applied_force(forces[i])
            with prof.section("set_displacement"):
                eq.set_displacement(displacements[i])
            for spring in stiffness_targets:
                k_range = spring.spring_constant_range
                with prof.section("set_spring_constant"):
                    spring.set_spring_constant(rng.uniform(k_range.min, k_range.max))
        except RangeError:
            rejected += 1
        assert check_system(system)

    return rejected, prof.stats.summary()


if __name__ == "__main__":
    for system in (SingleSpringSystem(), SeriesSystem(), ParallelSystem()):
        rejected, summary = run(system)
        print(f"{type(system).__name__}  rejected={rejected}")
        for k in ["set_applied_force", "set_displacement", "set_spring_constant"]:
            if k in summary:
                s = summary[k]
                print(f"  {k:20s} n={s['n']:5d} mean={s['mean_us']:7.2f} us "
                      f"max={s['max_us']:8.2f} us notifications/call={s['notifications_per_call']:.1f}")
        print()
