from .transform import Transform3

__all__ = ["Transform3"]
