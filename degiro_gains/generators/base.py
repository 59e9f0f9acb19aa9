"""Seeded Faker base for the synthetic ledger generators."""

from __future__ import annotations

import random
from abc import ABC

from faker import Faker


class BaseGenerator(ABC):
    """Hold a Faker instance and make a run reproducible.

    A seed pins both the Faker instance (ids, names) and the ``random``
    module (fill splits, product picks), so the same seed always yields
    the same statement.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale used for product names (default ``en_US``).
    """

    def __init__(self, seed: int | None = None, locale: str = "en_US") -> None:
        self.seed = seed
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)
            random.seed(seed)
