"""Initial RSVP schema with uniqueness constraint and indexes

Revision ID: 3c1f0a9d2e47
Revises: 
Create Date: 2026-10-17 10:02:11.418205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3c1f0a9d2e47'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

RSVP_STATUSES = ('ATTENDING', 'MAYBE', 'DECLINED')
EVENT_ROLES = ('PARTICIPANT', 'ORGANIZER')
TASK_STATUSES = ('PENDING', 'IN_PROGRESS', 'COMPLETED', 'CANCELLED')


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('first_name', sa.String(120), nullable=False),
        sa.Column('last_name', sa.String(120), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now())
    )
    op.create_index('ix_users_email', 'users', ['email'])
    
    # Create events table
    op.create_table(
        'events',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('date', sa.Date, nullable=False),
        sa.Column('time', sa.Time, nullable=True),
        sa.Column('duration_minutes', sa.Integer, nullable=False, server_default='60'),
        sa.Column('capacity', sa.Integer, nullable=True),
        sa.Column('budget', sa.Integer, nullable=False, server_default='0'),
        sa.Column('host_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('duration_minutes > 0', name='ck_event_duration_positive'),
        sa.CheckConstraint('capacity IS NULL OR capacity >= 0', name='ck_event_capacity_non_negative'),
    )
    op.create_index('idx_event_date', 'events', ['date'])
    op.create_index('idx_event_host', 'events', ['host_id'])

    op.create_table(
        'event_participants',
        sa.Column('event_id', sa.Uuid(), sa.ForeignKey('events.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
    )
    
    # Create rsvps table
    op.create_table(
        'rsvps',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('event_id', sa.Uuid(), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.Enum(*RSVP_STATUSES, name='rsvpstatus'), nullable=False, server_default='ATTENDING'),
        sa.Column('event_role', sa.Enum(*EVENT_ROLES, name='eventrole'), nullable=False, server_default='PARTICIPANT'),
        sa.Column('checked_in', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('checked_in_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())
    )
    op.create_index('idx_rsvp_user', 'rsvps', ['user_id'])
    op.create_index('idx_rsvp_event', 'rsvps', ['event_id'])
    op.create_unique_constraint('uq_user_event_rsvp', 'rsvps', ['user_id', 'event_id'])

    op.create_table(
        'tasks',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('event_id', sa.Uuid(), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('assignee_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('status', sa.Enum(*TASK_STATUSES, name='taskstatus'), nullable=False, server_default='PENDING'),
        sa.Column('due_date', sa.Date, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now())
    )
    op.create_index('idx_task_event', 'tasks', ['event_id'])
    op.create_index('idx_task_assignee', 'tasks', ['assignee_id'])


def downgrade() -> None:
    # Drop tables
    op.drop_table('tasks')
    op.drop_table('rsvps')
    op.drop_table('event_participants')
    op.drop_table('events')
    op.drop_table('users')
    
    # Drop enums
    sa.Enum(name='taskstatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='eventrole').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='rsvpstatus').drop(op.get_bind(), checkfirst=True)
