"""Детерминированное перемешивание и курсорная пагинация ленты."""
from typing import List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2 ** 32


class SeededRandom:
    """
    Линейный конгруэнтный генератор (параметры Numerical Recipes).
    Один и тот же сид всегда даёт одну и ту же последовательность.
    """

    def __init__(self, seed: int):
        self.state = seed % LCG_MODULUS

    def next_state(self) -> int:
        self.state = (LCG_MULTIPLIER * self.state + LCG_INCREMENT) % LCG_MODULUS
        return self.state

    def random(self) -> float:
        """Следующее число в [0, 1)."""
        return self.next_state() / LCG_MODULUS


def seeded_shuffle(items: Sequence[T], seed: int) -> List[T]:
    """Fisher–Yates по копии items; исходная последовательность не меняется."""
    shuffled = list(items)
    rng = SeededRandom(seed)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def paginate(
    ordered_ids: Sequence[int],
    cursor: Optional[int],
    limit: int,
) -> Tuple[List[int], Optional[int], bool]:
    """
    Возвращает (page, next_cursor, has_more).

    cursor: id последнего уже полученного кандидата. Если его больше нет
    в выдаче (кандидат стал неподходящим), начинаем с начала.
    """
    start = 0
    if cursor is not None:
        try:
            start = list(ordered_ids).index(cursor) + 1
        except ValueError:
            start = 0

    window = list(ordered_ids[start:start + limit + 1])
    has_more = len(window) > limit
    page = window[:limit]
    next_cursor = page[-1] if has_more and page else None
    return page, next_cursor, has_more
