# backend/binsurvey/schemas/report.py
from datetime import datetime

from .commons import CamelModel


class StreetReport(CamelModel):
    street: str
    total_bins: int
    bin_counts: dict[str, int]  # {"Green": n, ...} そのタグを含むエントリ数
    entry_count: int
    last_survey_at: datetime
    last_survey: str  # 表示用 YYYY-MM-DD
