"""
Determinism-friendly simulation helpers.

Small primitives (seeded stream, sim clock, logging setup, snapshot contracts)
that let the rest of the simulation avoid wall-clock time and global `random`.
"""
