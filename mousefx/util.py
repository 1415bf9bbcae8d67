import math
import numpy


def qmul(q1: numpy.ndarray, q2: numpy.ndarray) -> numpy.ndarray:
    """Multiply two quaternions."""
    x1, y1, z1, w1 = q1
    x2, y2, z2, w2 = q2
    return numpy.array([
        w1*x2 + x1*w2 + y1*z2 - z1*y2,
        w1*y2 - x1*z2 + y1*w2 + z1*x2,
        w1*z2 + x1*y2 - y1*x2 + z1*w2,
        w1*w2 - x1*x2 - y1*y2 - z1*z2
    ])


def qmul_vector(q: numpy.ndarray, v: numpy.ndarray) -> numpy.ndarray:
    x1, y1, z1, w1 = q
    x2, y2, z2 = v
    return numpy.array([
        w1*x2         + y1*z2 - z1*y2,
        w1*y2 - x1*z2         + z1*x2,
        w1*z2 + x1*y2 - y1*x2,
              - x1*x2 - y1*y2 - z1*z2
    ])


def qrot(q: numpy.ndarray, v: numpy.ndarray) -> numpy.ndarray:
    """Rotate vector v by quaternion q."""
    q_conj = numpy.array([-q[0], -q[1], -q[2], q[3]])
    rotated_v = qmul(qmul_vector(q, v), q_conj)
    return rotated_v[:3]


def qinv(q: numpy.ndarray) -> numpy.ndarray:
    """Compute the inverse of a unit quaternion."""
    return numpy.array([-q[0], -q[1], -q[2], q[3]])


def as_vec3(value) -> numpy.ndarray:
    """Приводит значение к float64 вектору из трёх компонент."""
    arr = numpy.asarray(value, dtype=numpy.float64).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"Expected 3 components, got {arr.shape[0]}")
    return arr
