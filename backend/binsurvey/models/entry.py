# backend/binsurvey/models/entry.py
from sqlalchemy import Integer, String, Float, Boolean, Column, DateTime, JSON
from .base import Base


class BinSurveyEntryRow(Base):
    __tablename__ = "bin_survey_entries"
    id = Column(Integer, primary_key=True)
    datetime = Column(DateTime(timezone=True), nullable=False, index=True)
    municipality = Column(String, nullable=False, default="Glyfada")
    street = Column(String, nullable=False, index=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    bin_types = Column(JSON, nullable=False)  # ["Green","Green","Blue"] 重複可
    quantity = Column(Integer, nullable=False)
    photo_uri = Column(String, nullable=True)  # /uploads/<name>
    comments = Column(String, nullable=True)
    synced = Column(Boolean, nullable=False, default=False)
