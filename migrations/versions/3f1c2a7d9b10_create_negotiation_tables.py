"""Create scheduling and negotiation tables

Revision ID: 3f1c2a7d9b10
Revises: 
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a7d9b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # Jobs
    op.create_table(
        'jobs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('contractor_id', sa.Uuid(), nullable=False),
        sa.Column('client_id', sa.Uuid(), nullable=False),
        sa.Column('customer_user_id', sa.Uuid(), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=True),
        sa.Column('scheduled_date', sa.Date(), nullable=False),
        sa.Column('scheduled_time', sa.Time(), nullable=True),
        sa.Column('time_slot', sa.String(length=20), nullable=True),
        sa.Column('duration_minutes', sa.Integer(), nullable=False, server_default='60'),
        sa.Column('status', sa.String(length=30), nullable=False, server_default='scheduled'),
        sa.Column('original_scheduled_date', sa.Date(), nullable=True),
        sa.Column('original_scheduled_time', sa.Time(), nullable=True),
        sa.Column('original_time_slot', sa.String(length=20), nullable=True),
        sa.Column('route_optimization_locked', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            "status IN ('scheduled', 'pending_confirmation', 'in_progress', 'completed', 'cancelled')",
            name='ck_jobs_status',
        ),
        sa.CheckConstraint('duration_minutes > 0', name='ck_jobs_duration_positive'),
    )
    op.create_index('ix_jobs_contractor_id', 'jobs', ['contractor_id'])
    op.create_index('ix_jobs_client_id', 'jobs', ['client_id'])
    op.create_index('ix_jobs_status', 'jobs', ['status'])
    op.create_index('ix_jobs_contractor_date', 'jobs', ['contractor_id', 'scheduled_date'])

    # Alternative suggestions
    op.create_table(
        'alternative_suggestions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('job_id', sa.Uuid(), nullable=False),
        sa.Column('contractor_id', sa.Uuid(), nullable=False),
        sa.Column('suggested_date', sa.Date(), nullable=False),
        sa.Column('suggested_time_slot', sa.String(length=20), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('responded_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id']),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'declined')",
            name='ck_alternative_suggestions_status',
        ),
        sa.CheckConstraint(
            "suggested_time_slot IN ('7am-10am', '10am-2pm', '2pm-5pm')",
            name='ck_alternative_suggestions_slot',
        ),
    )
    op.create_index('ix_alternative_suggestions_job_id', 'alternative_suggestions', ['job_id'])
    op.create_index('ix_alternative_suggestions_contractor_id', 'alternative_suggestions', ['contractor_id'])
    # At most one accepted suggestion per job
    op.create_index(
        'uq_alternative_suggestions_one_accepted',
        'alternative_suggestions',
        ['job_id'],
        unique=True,
        postgresql_where=sa.text("status = 'accepted'"),
        sqlite_where=sa.text("status = 'accepted'"),
    )

    # Route optimizations
    op.create_table(
        'route_optimizations',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('contractor_id', sa.Uuid(), nullable=False),
        sa.Column('optimization_date', sa.Date(), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('time_saved_minutes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('status', sa.String(length=30), nullable=False, server_default='pending_approval'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('level >= 1 AND level <= 3', name='ck_route_optimizations_level'),
        sa.CheckConstraint(
            "status IN ('pending_approval', 'awaiting_customer', 'applied', 'declined')",
            name='ck_route_optimizations_status',
        ),
    )
    op.create_index('ix_route_optimizations_contractor_id', 'route_optimizations', ['contractor_id'])
    op.create_index('ix_route_optimizations_status', 'route_optimizations', ['status'])

    op.create_table(
        'route_optimization_suggestions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('route_optimization_id', sa.Uuid(), nullable=False),
        sa.Column('job_id', sa.Uuid(), nullable=False),
        sa.Column('current_date_val', sa.Date(), nullable=False),
        sa.Column('current_time_slot', sa.String(length=20), nullable=False),
        sa.Column('suggested_date', sa.Date(), nullable=False),
        sa.Column('suggested_time_slot', sa.String(length=20), nullable=False),
        sa.Column('requires_customer_approval', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('customer_approval_status', sa.String(length=20), nullable=False, server_default='pending'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['route_optimization_id'], ['route_optimizations.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id']),
        sa.CheckConstraint(
            "current_time_slot IN ('morning', 'afternoon') AND suggested_time_slot IN ('morning', 'afternoon')",
            name='ck_route_optimization_suggestions_slots',
        ),
        sa.CheckConstraint(
            "customer_approval_status IN ('pending', 'approved', 'declined')",
            name='ck_route_optimization_suggestions_approval',
        ),
    )
    op.create_index(
        'ix_route_optimization_suggestions_route_optimization_id',
        'route_optimization_suggestions',
        ['route_optimization_id'],
    )
    op.create_index('ix_route_optimization_suggestions_job_id', 'route_optimization_suggestions', ['job_id'])

    # Notifications
    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_notifications_user_id', table_name='notifications')
    op.drop_table('notifications')
    op.drop_index('ix_route_optimization_suggestions_job_id', table_name='route_optimization_suggestions')
    op.drop_index(
        'ix_route_optimization_suggestions_route_optimization_id',
        table_name='route_optimization_suggestions',
    )
    op.drop_table('route_optimization_suggestions')
    op.drop_index('ix_route_optimizations_status', table_name='route_optimizations')
    op.drop_index('ix_route_optimizations_contractor_id', table_name='route_optimizations')
    op.drop_table('route_optimizations')
    op.drop_index('uq_alternative_suggestions_one_accepted', table_name='alternative_suggestions')
    op.drop_index('ix_alternative_suggestions_contractor_id', table_name='alternative_suggestions')
    op.drop_index('ix_alternative_suggestions_job_id', table_name='alternative_suggestions')
    op.drop_table('alternative_suggestions')
    op.drop_index('ix_jobs_contractor_date', table_name='jobs')
    op.drop_index('ix_jobs_status', table_name='jobs')
    op.drop_index('ix_jobs_client_id', table_name='jobs')
    op.drop_index('ix_jobs_contractor_id', table_name='jobs')
    op.drop_table('jobs')
