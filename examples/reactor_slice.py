import torch
from infinite_region import *
import matplotlib.pyplot as plt

instructions = [
    "on x=-20..26,y=-36..17,z=-47..7",
    "on x=-20..33,y=-21..23,z=-26..28",
    "on x=-22..28,y=-29..23,z=-38..16",
    "off x=-48..-32,y=26..41,z=-47..-37",
    "on x=-12..35,y=6..50,z=-50..-2",
    "off x=-40..-22,y=-38..-28,z=23..41",
    "on x=-16..35,y=-41..10,z=-47..6",
    "off x=-32..-23,y=11..30,z=-14..3",
]

region = RegionEngine(validate=True).run(parse_instructions(instructions))
print(f"{region.total_volume()} cubes on in {len(region)} cuboids")

# Materialize the initialization region and look at three z-slices
grid = region.rasterize(INITIALIZATION_REGION)
z_origin = INITIALIZATION_REGION.z.lo

fig, axs = plt.subplots(1, 3, figsize=(15, 5))

for ax, z in zip(axs, (-40, -10, 10)):
    ax.imshow(grid[:, :, z - z_origin].T.to(torch.uint8).numpy(), origin='lower',
              extent=(-50.5, 50.5, -50.5, 50.5))
    ax.set_title(f'z = {z}')

plt.show()
