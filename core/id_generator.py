import random

# Двухзначные коды сущностей
TYPE_POSTFIX = {
    "users": 1,
    "swipes": 2,
    "matches": 5,
    "messages": 6,
}


def generate_random_id(entity: str) -> int:
    """Возвращает id: 12 случайных цифр + 2-значный постфикс сущности."""
    if entity not in TYPE_POSTFIX:
        raise ValueError(f"Unknown entity for ID generation: {entity}")
    rand12 = random.randint(100_000_000_000, 999_999_999_999)
    postfix = TYPE_POSTFIX[entity]
    return rand12 * 100 + postfix
