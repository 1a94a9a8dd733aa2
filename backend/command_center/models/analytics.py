from datetime import datetime
import enum
import uuid

from sqlalchemy import Column, String, DateTime, Date, Float

from command_center.database import Base
from command_center.database_types import GUID, JSON, enum_column_type


class MetricType(str, enum.Enum):
    COUNT = "count"
    PERCENTAGE = "percentage"
    SCORE = "score"
    RATE = "rate"


class MetricCategory(str, enum.Enum):
    STUDENTS = "students"
    EMPLOYERS = "employers"
    JOBS = "jobs"
    MATCHES = "matches"


class MetricPeriod(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class AnalyticsMetric(Base):
    """Pre-aggregated program metric for a period (written by reporting jobs)."""
    __tablename__ = "analytics"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    metric_name = Column(String(255), nullable=False, index=True)
    metric_value = Column(Float, nullable=False)
    metric_type = Column(enum_column_type(MetricType, "metric_type"), nullable=False)
    category = Column(enum_column_type(MetricCategory, "metric_category"), nullable=False, index=True)
    period = Column(enum_column_type(MetricPeriod, "metric_period"), nullable=False)
    period_date = Column(Date, nullable=False)
    # "metadata" is reserved on declarative classes
    metric_metadata = Column("metadata", JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
