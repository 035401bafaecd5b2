# backend/binsurvey/models/user.py
from sqlalchemy import Integer, String, Column
from .base import Base


class UserRow(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    username = Column(String, nullable=False, unique=True)
    password = Column(String, nullable=False)
