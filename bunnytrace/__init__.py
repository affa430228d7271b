"""A small Whitted-style ray tracer with BVH acceleration, OBJ mesh loading and PPM output."""

__version__ = "0.1.0"