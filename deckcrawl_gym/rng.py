"""Seedable randomness for the game engine.

Every subsystem that shuffles draws from its own named stream, so a run is
fully determined by the master seed and adding a draw in one subsystem does
not disturb the others.
"""

from __future__ import annotations

import random
from typing import Dict, List, MutableSequence, Optional, Tuple

STREAM_NAMES = ("deck_shuffle", "floor_shuffle", "shop_shuffle")


class DeterministicRNG:
    """Centralized RNG system with separate streams for each subsystem"""

    def __init__(self, master_seed: Optional[int] = None):
        self.master_seed = master_seed if master_seed is not None else random.randint(0, 2**32 - 1)
        self.streams: Dict[str, random.Random] = {}
        self.history: List[Tuple[str, str, int]] = []
        self._initialize_streams()

    def _initialize_streams(self):
        for i, name in enumerate(STREAM_NAMES):
            # Each stream gets a unique seed derived from master seed
            stream_seed = (self.master_seed + i * 1000) % (2**32)
            self.streams[name] = random.Random(stream_seed)

    def _stream(self, stream: str) -> random.Random:
        if stream not in self.streams:
            raise ValueError(f"Unknown RNG stream: {stream}")
        return self.streams[stream]

    def shuffle(self, stream: str, seq: MutableSequence) -> None:
        """Shuffle ``seq`` in place using a specific stream"""
        self._stream(stream).shuffle(seq)
        self.history.append((stream, "shuffle", len(seq)))
