"""Initial schema: users, interviews, interview sessions and career content

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def _scores():
    return [
        sa.Column('overall_score', sa.Float(), nullable=True),
        sa.Column('technical_score', sa.Float(), nullable=True),
        sa.Column('communication_score', sa.Float(), nullable=True),
        sa.Column('problem_solving_score', sa.Float(), nullable=True),
        sa.Column('feedback', sa.JSON(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('avatar_url', sa.String(length=512), nullable=True),
        sa.Column('skills', sa.JSON(), nullable=True),
        sa.Column('badges', sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'])

    op.create_table(
        'interviews',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('role', sa.String(length=255), nullable=False),
        sa.Column('difficulty', sa.String(length=20), nullable=False),
        sa.Column('scheduled_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('resume_url', sa.String(length=512), nullable=False),
        sa.Column('skills', sa.JSON(), nullable=True),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('ended_at', sa.DateTime(timezone=True), nullable=True),
        *_scores(),
        *_timestamps(),
    )
    op.create_index('ix_interviews_user_id', 'interviews', ['user_id'])

    # No foreign key to interviews: the two records are written separately
    op.create_table(
        'interview_sessions',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('interview_id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('conversation', sa.JSON(), nullable=False),
        sa.Column('question_evaluations', sa.JSON(), nullable=False),
        sa.Column('session_status', sa.String(length=50), nullable=False),
        *_scores(),
        *_timestamps(),
    )
    op.create_index('ix_interview_sessions_interview_id', 'interview_sessions', ['interview_id'])
    op.create_index('ix_interview_sessions_user_id', 'interview_sessions', ['user_id'])

    op.create_table(
        'job_listings',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('company', sa.String(length=255), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('requirements', sa.JSON(), nullable=True),
        sa.Column('salary_range', sa.String(length=100), nullable=True),
        sa.Column('application_url', sa.String(length=512), nullable=False),
        sa.Column('posted_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_job_listings_posted_at', 'job_listings', ['posted_at'])

    op.create_table(
        'career_resources',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('author', sa.String(length=255), nullable=True),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('featured', sa.Boolean(), nullable=False),
        sa.Column('thumbnail', sa.String(length=512), nullable=True),
    )
    op.create_index('ix_career_resources_category', 'career_resources', ['category'])
    op.create_index('ix_career_resources_published_at', 'career_resources', ['published_at'])


def downgrade() -> None:
    op.drop_table('career_resources')
    op.drop_table('job_listings')
    op.drop_table('interview_sessions')
    op.drop_table('interviews')
    op.drop_table('users')
