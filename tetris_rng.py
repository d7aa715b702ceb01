
"""7-bag randomizer module"""
import random
from typing import List, Optional
from tetris_config import CONFIG
from tetris_piece import KINDS


class BagRandom:
    """Deals every kind once per bag in shuffled order, then refills."""
    PIECES = KINDS

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = CONFIG["RNG_SEED"]
        self.rng = random.Random(seed)
        self.bag: List[str] = []

    def _refill(self):
        self.bag = list(self.PIECES)
        # Fisher-Yates
        self.rng.shuffle(self.bag)

    def peek(self) -> str:
        if not self.bag: self._refill()
        return self.bag[0]

    def next_piece(self) -> str:
        if not self.bag: self._refill()
        return self.bag.pop(0)
