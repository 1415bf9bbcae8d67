import numpy as np


class Ray3:
    """
    Простой луч в 3D:
    origin — начало
    direction — нормализованное направление
    """
    def __init__(self, origin: np.ndarray, direction: np.ndarray):
        self.origin = np.asarray(origin, dtype=np.float64)
        d = np.asarray(direction, dtype=np.float64)
        n = np.linalg.norm(d)
        if n <= 1e-12:
            raise ValueError("Ray3: direction must be non-zero")
        self.direction = d / n

    def point_at(self, t: float) -> np.ndarray:
        """
        Возвращает точку на луче при параметре t:
        P(t) = origin + direction * t
        """
        return self.origin + self.direction * float(t)

    def __repr__(self):
        return f"Ray3(origin={self.origin}, direction={self.direction})"
