"""Database models"""
from command_center.models.student import Student, StudentStatus, Availability
from command_center.models.employer import Employer, EmployerStatus, CompanySize
from command_center.models.job_posting import JobPosting, JobStatus, EmploymentType
from command_center.models.match import Match, MatchStatus
from command_center.models.organizer import Organizer, OrganizerRole
from command_center.models.analytics import AnalyticsMetric, MetricType, MetricCategory, MetricPeriod
from command_center.models.application import Application, ApplicationStatus
from command_center.models.notification import Notification, RecipientType
from command_center.models.ai_interaction import AIInteraction, AIToolType

__all__ = [
    "Student",
    "StudentStatus",
    "Availability",
    "Employer",
    "EmployerStatus",
    "CompanySize",
    "JobPosting",
    "JobStatus",
    "EmploymentType",
    "Match",
    "MatchStatus",
    "Organizer",
    "OrganizerRole",
    "AnalyticsMetric",
    "MetricType",
    "MetricCategory",
    "MetricPeriod",
    "Application",
    "ApplicationStatus",
    "Notification",
    "RecipientType",
    "AIInteraction",
    "AIToolType",
]
