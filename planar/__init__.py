"""
Planar Machines - simulation core for an idle factory game.

Machines on a board are linked by capacity-limited connections; a mine turns
elapsed time into resources, and portals open onto seeded procedural planes.
"""
