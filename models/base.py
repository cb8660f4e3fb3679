from datetime import datetime, timezone

from sqlalchemy import event
from sqlalchemy.orm import declarative_base

from core.id_generator import generate_random_id

# Общий Base для всех моделей
Base = declarative_base()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@event.listens_for(Base, "before_insert", propagate=True)
def assign_random_id(mapper, connection, target):
    # id можно задать явно (сиды, тесты), иначе генерируем по таблице
    if getattr(target, "id", None) is None:
        target.id = generate_random_id(target.__tablename__)
