"""Supporting systems: deterministic randomness."""

from tilegame.systems.rng import DeterministicRNG

__all__ = ["DeterministicRNG"]
