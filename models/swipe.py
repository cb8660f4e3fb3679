# models/swipe.py
from sqlalchemy import Column, BigInteger, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from .base import Base

SWIPE_LEFT = "left"
SWIPE_RIGHT = "right"
SWIPE_DIRECTIONS = (SWIPE_LEFT, SWIPE_RIGHT)


class Swipe(Base):
    __tablename__ = "swipes"

    id = Column(BigInteger, primary_key=True, index=True)
    swiper_id = Column(BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    swiped_id = Column(BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    direction = Column(String(5), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("swiper_id", "swiped_id", name="uq_swipe_swiper_swiped"),
    )

    def __repr__(self):
        return f"<Swipe {self.swiper_id}→{self.swiped_id} {self.direction}>"
