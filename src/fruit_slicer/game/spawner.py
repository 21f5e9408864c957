import random
from typing import List, Optional, Sequence, Tuple

from .state import ObjectKind


class Spawner:
    """
    Decides what a spawn wave contains.

    Fruits come in waves; a bomb follows once the fruits-till-next-bomb
    counter runs out, then the counter is redrawn from [lo, hi).
    """

    def __init__(self, fruit_sprites: Sequence[str], bomb_sprite: str,
                 bomb_every: Tuple[int, int] = (4, 8),
                 rng: Optional[random.Random] = None):
        if not fruit_sprites:
            raise ValueError("at least one fruit sprite is required")
        lo, hi = bomb_every
        if not 0 < lo < hi:
            raise ValueError(f"bomb cadence must satisfy 0 < lo < hi, got {bomb_every}")

        self.fruit_sprites = list(fruit_sprites)
        self.bomb_sprite = bomb_sprite
        self.bomb_every = (int(lo), int(hi))
        self.rng = rng or random.Random()
        self.fruits_till_bomb = self._draw_counter()

    def _draw_counter(self) -> int:
        lo, hi = self.bomb_every
        return self.rng.randrange(lo, hi)

    def reset(self):
        self.fruits_till_bomb = self._draw_counter()

    def sprite_for(self, kind: ObjectKind) -> str:
        if kind is ObjectKind.BOMB:
            return self.bomb_sprite
        return self.rng.choice(self.fruit_sprites)

    def next_wave(self, count: int) -> List[ObjectKind]:
        kinds = [ObjectKind.FRUIT] * max(0, int(count))

        self.fruits_till_bomb -= len(kinds)
        if self.fruits_till_bomb <= 0:
            self.fruits_till_bomb = self._draw_counter()
            kinds.append(ObjectKind.BOMB)
        return kinds
