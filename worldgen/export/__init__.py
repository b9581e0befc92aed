"""Writers for PNG and RAW heightmaps, normal maps and plate maps."""

__all__ = ["png", "raw", "normal_map", "plate_map"]