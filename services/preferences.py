"""Совместимость по полу и предпочтениям (двусторонний фильтр ленты)."""
from typing import Iterable, Optional

GENDER_MALE = "Male"
GENDER_FEMALE = "Female"
GENDER_NON_BINARY = "Non-binary"
GENDER_OTHER = "Other"
GENDERS = (GENDER_MALE, GENDER_FEMALE, GENDER_NON_BINARY, GENDER_OTHER)

LOOKING_FOR_MEN = "Men"
LOOKING_FOR_WOMEN = "Women"
LOOKING_FOR_NON_BINARY = "Non-binary"
LOOKING_FOR_EVERYONE = "Everyone"
LOOKING_FOR_OPTIONS = (
    LOOKING_FOR_MEN,
    LOOKING_FOR_WOMEN,
    LOOKING_FOR_NON_BINARY,
    LOOKING_FOR_EVERYONE,
)

# "Other" сюда не входит: такие анкеты видят только те, кто выбрал Everyone
LABEL_TO_GENDER = {
    LOOKING_FOR_MEN: GENDER_MALE,
    LOOKING_FOR_WOMEN: GENDER_FEMALE,
    LOOKING_FOR_NON_BINARY: GENDER_NON_BINARY,
}


def accepts_gender(looking_for: Optional[Iterable[str]], gender: str) -> bool:
    """
    Хочет ли человек с предпочтениями looking_for видеть анкету пола gender.
    Пустой список предпочтений: не показываем никого.
    """
    labels = set(looking_for or ())
    if LOOKING_FOR_EVERYONE in labels:
        return True
    return any(LABEL_TO_GENDER.get(label) == gender for label in labels)


def accepts_viewer(looking_for: Optional[Iterable[str]], viewer_gender: str) -> bool:
    """
    Обратное направление: готов ли кандидат быть показанным зрителю.
    Non-binary/Other зрители подходят и тем, кто ищет Men или Women.
    """
    if accepts_gender(looking_for, viewer_gender):
        return True
    if viewer_gender in (GENDER_NON_BINARY, GENDER_OTHER):
        labels = set(looking_for or ())
        return bool(labels & {LOOKING_FOR_MEN, LOOKING_FOR_WOMEN})
    return False


def is_compatible(viewer, candidate) -> bool:
    return (
        accepts_gender(viewer.looking_for_genders, candidate.gender)
        and accepts_viewer(candidate.looking_for_genders, viewer.gender)
    )
