"""The elastic-net penalty and its proximal operator."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class L1L2:
    """The penalty ``lambda1 * |x|_1 + lambda2 * |x|_2^2``."""

    lambda1: float = 0.0
    lambda2: float = 0.0

    def __post_init__(self) -> None:
        if self.lambda1 < 0:
            raise ValueError(f"lambda1 must be non-negative, got {self.lambda1}")
        if self.lambda2 < 0:
            raise ValueError(f"lambda2 must be non-negative, got {self.lambda2}")

    def solve(self, z: float, eta: float) -> float:
        """Return ``argmin_x 0.5*eta*(x - z/eta)^2 + h(x)`` by soft-thresholding.

        ``z`` is typically ``eta * w - grad`` and ``eta`` the inverse learning rate.
        """
        if not eta > 0:
            raise ValueError(f"eta must be positive, got {eta}")
        if -self.lambda1 <= z <= self.lambda1:
            return 0.0
        shrunk = z - self.lambda1 if z > 0 else z + self.lambda1
        return shrunk / (eta + self.lambda2)