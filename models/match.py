# models/match.py
from sqlalchemy import Column, BigInteger, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base, utc_now


class Match(Base):
    __tablename__ = "matches"

    id = Column(BigInteger, primary_key=True, index=True)
    # user1_id < user2_id: одна строка на неупорядоченную пару
    user1_id = Column(BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    user2_id = Column(BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    user1_viewed = Column(Boolean, default=False, nullable=False)
    user2_viewed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    __table_args__ = (
        UniqueConstraint("user1_id", "user2_id", name="uq_match_user1_user2"),
    )

    user1 = relationship("User", foreign_keys=[user1_id])
    user2 = relationship("User", foreign_keys=[user2_id])

    def has_participant(self, user_id: int) -> bool:
        return user_id in (self.user1_id, self.user2_id)

    def other_participant(self, user_id: int) -> int:
        return self.user2_id if self.user1_id == user_id else self.user1_id

    def other_user(self, user_id: int):
        # user1/user2 должны быть загружены заранее (selectinload)
        return self.user2 if self.user1_id == user_id else self.user1

    def is_viewed_by(self, user_id: int) -> bool:
        return self.user1_viewed if self.user1_id == user_id else self.user2_viewed

    def mark_viewed_by(self, user_id: int) -> None:
        if self.user1_id == user_id:
            self.user1_viewed = True
        else:
            self.user2_viewed = True

    def __repr__(self):
        return f"<Match {self.user1_id}↔{self.user2_id}>"
