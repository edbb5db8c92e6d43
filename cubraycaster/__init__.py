"""Grid-based first-person raycasting engine for .cub scene files."""

__version__ = "0.1.0"