"""CraftLab: inertial craft on a wrap-around plane."""

__version__ = "1.0.0"
