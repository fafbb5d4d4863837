from .normalize import normalize_points

__all__ = ["normalize_points"]
