"""Core utility functions for the curling bot."""

from .math import clamp, distance, gauss_random, rand_between, random_sign, side_of

__all__ = [
    "clamp",
    "distance",
    "gauss_random",
    "rand_between",
    "random_sign",
    "side_of",
]
