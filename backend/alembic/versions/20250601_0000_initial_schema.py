"""initial_schema

Revision ID: 20250601_0000
Revises:
Create Date: 2025-06-01 00:00:00.000000+00:00

"""
from alembic import op
import sqlalchemy as sa

from command_center.database_types import GUID, JSON, StringList


revision = '20250601_0000'
down_revision = None
branch_labels = None
depends_on = None


def _enum(name, *values):
    return sa.Enum(*values, name=name)


def upgrade() -> None:
    op.create_table(
        'students',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('university', sa.String(length=255), nullable=False),
        sa.Column('degree', sa.String(length=255), nullable=False),
        sa.Column('graduation_year', sa.Integer(), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('linkedin_url', sa.String(length=500), nullable=True),
        sa.Column('github_url', sa.String(length=500), nullable=True),
        sa.Column('portfolio_url', sa.String(length=500), nullable=True),
        sa.Column('resume_url', sa.String(length=500), nullable=True),
        sa.Column('profile_photo_url', sa.String(length=500), nullable=True),
        sa.Column('cv_url', sa.String(length=500), nullable=True),
        sa.Column('academic_records_url', sa.String(length=500), nullable=True),
        sa.Column('skills', StringList(), nullable=False),
        sa.Column('interests', StringList(), nullable=False),
        sa.Column('availability', _enum('student_availability', 'full-time', 'part-time', 'internship', 'contract'),
                  nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('status', _enum('student_status', 'pending', 'approved', 'rejected', 'draft'), nullable=False),
        sa.Column('ai_validation_score', sa.Float(), nullable=True),
        sa.Column('ai_validation_notes', sa.Text(), nullable=True),
        sa.Column('cv_analysis_score', sa.Float(), nullable=True),
        sa.Column('cv_analysis_notes', sa.Text(), nullable=True),
        sa.Column('academic_records_analysis_score', sa.Float(), nullable=True),
        sa.Column('academic_records_analysis_notes', sa.Text(), nullable=True),
        sa.Column('documents_uploaded_at', sa.DateTime(), nullable=True),
        sa.Column('documents_analyzed_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('last_activity', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_students_email'), 'students', ['email'], unique=True)
    op.create_index(op.f('ix_students_status'), 'students', ['status'], unique=False)
    op.create_index(op.f('ix_students_created_at'), 'students', ['created_at'], unique=False)

    op.create_table(
        'employers',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('company_name', sa.String(length=255), nullable=False),
        sa.Column('website', sa.String(length=500), nullable=True),
        sa.Column('industry', sa.String(length=255), nullable=False),
        sa.Column('company_size', _enum('company_size', 'startup', 'small', 'medium', 'large', 'enterprise'),
                  nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('logo_url', sa.String(length=500), nullable=True),
        sa.Column('contact_email', sa.String(), nullable=False),
        sa.Column('contact_name', sa.String(length=255), nullable=False),
        sa.Column('contact_title', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('status', _enum('employer_status', 'pending', 'approved', 'rejected', 'draft'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('last_activity', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_employers_company_name'), 'employers', ['company_name'], unique=False)
    op.create_index(op.f('ix_employers_contact_email'), 'employers', ['contact_email'], unique=True)
    op.create_index(op.f('ix_employers_status'), 'employers', ['status'], unique=False)
    op.create_index(op.f('ix_employers_created_at'), 'employers', ['created_at'], unique=False)

    op.create_table(
        'job_postings',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('employer_id', GUID(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('requirements', StringList(), nullable=False),
        sa.Column('skills_required', StringList(), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('employment_type', _enum('employment_type', 'full-time', 'part-time', 'internship', 'contract'),
                  nullable=False),
        sa.Column('salary_min', sa.Integer(), nullable=True),
        sa.Column('salary_max', sa.Integer(), nullable=True),
        sa.Column('application_deadline', sa.DateTime(), nullable=True),
        sa.Column('status', _enum('job_status', 'draft', 'pending_review', 'approved', 'rejected', 'published',
                                  'closed'), nullable=False),
        sa.Column('ai_enhancement_score', sa.Float(), nullable=True),
        sa.Column('ai_enhancement_notes', sa.Text(), nullable=True),
        sa.Column('original_description', sa.Text(), nullable=True),
        sa.Column('enhanced_description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('last_activity', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['employer_id'], ['employers.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_job_postings_employer_id'), 'job_postings', ['employer_id'], unique=False)
    op.create_index(op.f('ix_job_postings_status'), 'job_postings', ['status'], unique=False)
    op.create_index(op.f('ix_job_postings_created_at'), 'job_postings', ['created_at'], unique=False)

    op.create_table(
        'matches',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('student_id', GUID(), nullable=False),
        sa.Column('employer_id', GUID(), nullable=False),
        sa.Column('job_posting_id', GUID(), nullable=True),
        sa.Column('match_score', sa.Float(), nullable=False),
        sa.Column('status', _enum('match_status', 'suggested', 'viewed', 'interested', 'not_interested',
                                  'matched'), nullable=False),
        sa.Column('ai_notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('last_activity', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['student_id'], ['students.id']),
        sa.ForeignKeyConstraint(['employer_id'], ['employers.id']),
        sa.ForeignKeyConstraint(['job_posting_id'], ['job_postings.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('student_id', 'employer_id', 'job_posting_id', name='uq_match_student_employer_job')
    )
    op.create_index(op.f('ix_matches_student_id'), 'matches', ['student_id'], unique=False)
    op.create_index(op.f('ix_matches_employer_id'), 'matches', ['employer_id'], unique=False)
    op.create_index(op.f('ix_matches_job_posting_id'), 'matches', ['job_posting_id'], unique=False)
    op.create_index(op.f('ix_matches_status'), 'matches', ['status'], unique=False)

    op.create_table(
        'organizers',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('role', _enum('organizer_role', 'admin', 'organizer'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('auth_user_id', GUID(), nullable=True),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_organizers_email'), 'organizers', ['email'], unique=True)
    op.create_index(op.f('ix_organizers_role'), 'organizers', ['role'], unique=False)
    op.create_index(op.f('ix_organizers_auth_user_id'), 'organizers', ['auth_user_id'], unique=True)

    op.create_table(
        'analytics',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('metric_name', sa.String(length=255), nullable=False),
        sa.Column('metric_value', sa.Float(), nullable=False),
        sa.Column('metric_type', _enum('metric_type', 'count', 'percentage', 'score', 'rate'), nullable=False),
        sa.Column('category', _enum('metric_category', 'students', 'employers', 'jobs', 'matches'), nullable=False),
        sa.Column('period', _enum('metric_period', 'daily', 'weekly', 'monthly', 'yearly'), nullable=False),
        sa.Column('period_date', sa.Date(), nullable=False),
        sa.Column('metadata', JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_analytics_metric_name'), 'analytics', ['metric_name'], unique=False)
    op.create_index(op.f('ix_analytics_category'), 'analytics', ['category'], unique=False)

    op.create_table(
        'applications',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('student_id', GUID(), nullable=False),
        sa.Column('job_posting_id', GUID(), nullable=False),
        sa.Column('status', _enum('application_status', 'applied', 'reviewed', 'interviewed', 'accepted',
                                  'rejected'), nullable=False),
        sa.Column('cover_letter', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('applied_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['student_id'], ['students.id']),
        sa.ForeignKeyConstraint(['job_posting_id'], ['job_postings.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_applications_student_id'), 'applications', ['student_id'], unique=False)
    op.create_index(op.f('ix_applications_job_posting_id'), 'applications', ['job_posting_id'], unique=False)

    op.create_table(
        'notifications',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('recipient_type', _enum('recipient_type', 'student', 'employer', 'organizer'), nullable=False),
        sa.Column('recipient_id', GUID(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('type', sa.String(length=100), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False),
        sa.Column('read_at', sa.DateTime(), nullable=True),
        sa.Column('metadata', JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_notifications_recipient_id'), 'notifications', ['recipient_id'], unique=False)

    op.create_table(
        'ai_interactions',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('tool_type', _enum('ai_tool_type', 'student_validator', 'job_enhancer', 'matchmaking'),
                  nullable=False),
        sa.Column('user_id', GUID(), nullable=False),
        sa.Column('user_type', _enum('ai_user_type', 'student', 'employer', 'organizer'), nullable=False),
        sa.Column('input_data', JSON(), nullable=False),
        sa.Column('output_data', JSON(), nullable=True),
        sa.Column('processing_time_ms', sa.Integer(), nullable=True),
        sa.Column('success', sa.Boolean(), nullable=False),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_ai_interactions_tool_type'), 'ai_interactions', ['tool_type'], unique=False)


def downgrade() -> None:
    op.drop_table('ai_interactions')
    op.drop_table('notifications')
    op.drop_table('applications')
    op.drop_table('analytics')
    op.drop_table('organizers')
    op.drop_table('matches')
    op.drop_table('job_postings')
    op.drop_table('employers')
    op.drop_table('students')

    bind = op.get_bind()
    for name in (
        'ai_user_type', 'ai_tool_type', 'recipient_type', 'application_status', 'metric_period',
        'metric_category', 'metric_type', 'organizer_role', 'match_status', 'job_status',
        'employment_type', 'employer_status', 'company_size', 'student_status', 'student_availability',
    ):
        sa.Enum(name=name).drop(bind, checkfirst=True)
