# models/user.py
from sqlalchemy import Column, BigInteger, Integer, DateTime, Boolean, String, Text, Date, JSON

from .base import Base, utc_now


class User(Base):
    __tablename__ = "users"

    id = Column(BigInteger, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    name = Column(String(100), nullable=False)
    age = Column(Integer, nullable=False, index=True)
    birthday = Column(Date, nullable=True)
    show_birthday = Column(Boolean, default=False, nullable=False)
    gender = Column(String(20), nullable=False)
    looking_for_genders = Column(JSON, default=list, nullable=False)
    bio = Column(Text, default="", nullable=False)
    photo_url = Column(String(1024), nullable=False)
    photos = Column(JSON, default=list, nullable=False)
    province = Column(String(128), nullable=True, index=True)
    city = Column(String(128), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    def __repr__(self):
        return f"<User id={self.id} email={self.email}>"
