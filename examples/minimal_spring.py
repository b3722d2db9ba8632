# examples/minimal_spring.py
from hookes_law import Spring

spring = Spring(spring_constant=200, applied_force_range=(-100, 100))
spring.displacement_property.subscribe(lambda new, old: print(f"x: {old:.3f} -> {new:.3f} m"))

spring.set_applied_force(50)        # x = F/k
spring.set_spring_constant(400)     # same load, stiffer spring
spring.set_displacement(-0.1)       # pull to a position, F follows

print("F:", spring.applied_force, "N")
print("length:", spring.length, "m")
print("spring force:", spring.spring_force, "N")
print("max displacement at current k:", spring.get_max_displacement(), "m")
