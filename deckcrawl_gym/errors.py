"""Exceptions raised inside the engine.

Gameplay mistakes never escape a public :class:`~deckcrawl_gym.game.Game`
operation: they are caught at the operation boundary and reported as a status
line. These classes exist so the lookups underneath can fail loudly.
"""


class GameError(Exception):
    """Base class for recoverable gameplay errors."""


class InvalidSlotError(GameError, IndexError):
    """A 1-based room or shop slot that holds no card."""

    def __init__(self, where: str, slot):
        self.where = where
        self.slot = slot
        super().__init__(f"No card in {where} slot {slot}")
