"""Reproducible random sources from a seed. Seed -1 = new random seed each call.
Each simulation component gets its own child generator, so adding draws in one component
never shifts the sequence seen by another."""

import random

import numpy as np


def resolve_seed(seed: int) -> int:
    """Return seed, or a fresh random one if seed == -1."""
    if seed == -1:
        return random.randint(0, 2**31 - 1)
    if seed < 0:
        raise ValueError(f"seed must be -1 or non-negative, got {seed}")
    return seed


def make_rng(seed: int) -> tuple[np.random.Generator, int]:
    """Return (generator, seed_used)."""
    seed_used = resolve_seed(seed)
    return np.random.default_rng(seed_used), seed_used


def child_rngs(seed: int, n: int) -> tuple[list[np.random.Generator], int]:
    """Return n independent generators derived from one seed, and the seed used."""
    seed_used = resolve_seed(seed)
    children = np.random.SeedSequence(seed_used).spawn(n)
    return [np.random.default_rng(s) for s in children], seed_used
