# models/message.py
from sqlalchemy import Column, BigInteger, Boolean, Text, DateTime, ForeignKey

from .base import Base, utc_now


class Message(Base):
    __tablename__ = "messages"

    id = Column(BigInteger, primary_key=True, index=True)
    match_id = Column(BigInteger, ForeignKey("matches.id", ondelete="CASCADE"), nullable=False, index=True)
    sender_id = Column(BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    receiver_id = Column(BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    read = Column(Boolean, default=False, nullable=False)
    # Время ставит приложение, а не БД. Переписка сортируется по (created_at, id):
    # порядок отправки точен до микросекунды, при совпадении времени он
    # детерминирован, но не обязательно совпадает с порядком вставки (id случайные).
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    def __repr__(self):
        return f"<Message match={self.match_id} from={self.sender_id}>"
