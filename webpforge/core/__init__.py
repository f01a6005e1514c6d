"""Core subsystems: hashing, path mapping, storage, resolution, and the decision engine."""
