"""Initial schema - conversations, messages, mood entries, crisis alerts, mood analytics

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the core Heal database schema:
- conversations / messages: Companion conversation threads
- mood_entries: Mood check-ins
- crisis_alerts: Append-only crisis audit trail
- mood_analytics: Computed analytics snapshots
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'conversations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_conversations_user_id', 'conversations', ['user_id'])

    op.create_table(
        'messages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('conversation_id', sa.Integer(), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['conversation_id'], ['conversations.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_messages_conversation_id', 'messages', ['conversation_id'])

    op.create_table(
        'mood_entries',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('mood', sa.String(30), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('sleep_hours', sa.Integer(), nullable=True),
        sa.Column('stress_level', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_mood_entries_user_id', 'mood_entries', ['user_id'])
    op.create_index('ix_mood_entries_created_at', 'mood_entries', ['created_at'])

    # Append-only; rows are only updated by administrative resolution
    op.create_table(
        'crisis_alerts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('trigger_phrase', sa.String(200), nullable=False),
        sa.Column('response_given', sa.String(200), nullable=False),
        sa.Column('severity', sa.String(20), nullable=False),
        sa.Column('resolved', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_crisis_alerts_user_id', 'crisis_alerts', ['user_id'])
    op.create_index('ix_crisis_alerts_severity', 'crisis_alerts', ['severity'])
    op.create_index('ix_crisis_alerts_created_at', 'crisis_alerts', ['created_at'])

    op.create_table(
        'mood_analytics',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('period_type', sa.String(20), nullable=False),
        sa.Column('average_mood_score', sa.Float(), nullable=False),
        sa.Column('dominant_mood', sa.String(30), nullable=False),
        sa.Column('total_entries', sa.Integer(), nullable=False),
        sa.Column('mood_distribution', sa.JSON(), nullable=False),
        sa.Column('insights', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_mood_analytics_user_id', 'mood_analytics', ['user_id'])


def downgrade() -> None:
    op.drop_table('mood_analytics')
    op.drop_table('crisis_alerts')
    op.drop_table('mood_entries')
    op.drop_table('messages')
    op.drop_table('conversations')
