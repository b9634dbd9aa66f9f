"""create profile, mentor and chat tables

Revision ID: chat_001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = 'chat_001'
down_revision = None
branch_labels = None
depends_on = None

def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]

def upgrade() -> None:
    op.create_table('profiles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=True),
        sa.Column('full_name', sa.String(length=200), nullable=True),
        sa.Column('user_type', sa.String(length=10), nullable=False),
        sa.Column('avatar_url', sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_profiles_id'), 'profiles', ['id'])
    op.create_index(op.f('ix_profiles_username'), 'profiles', ['username'], unique=True)
    op.create_index(op.f('ix_profiles_created_at'), 'profiles', ['created_at'])

    op.create_table('mentors',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('profile_id', sa.Uuid(), nullable=False),
        sa.Column('specialization', sa.String(length=500), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('experience_years', sa.Integer(), nullable=True),
        sa.Column('is_available', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_mentors_id'), 'mentors', ['id'])
    op.create_index(op.f('ix_mentors_profile_id'), 'mentors', ['profile_id'], unique=True)
    op.create_index(op.f('ix_mentors_is_available'), 'mentors', ['is_available'])
    op.create_index(op.f('ix_mentors_created_at'), 'mentors', ['created_at'])

    op.create_table('chat_rooms',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('mentor_id', sa.Uuid(), nullable=False),
        sa.Column('patient_id', sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['mentor_id'], ['profiles.id'], ),
        sa.ForeignKeyConstraint(['patient_id'], ['profiles.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('mentor_id', 'patient_id', name='uq_chat_rooms_mentor_patient')
    )
    op.create_index(op.f('ix_chat_rooms_id'), 'chat_rooms', ['id'])
    op.create_index(op.f('ix_chat_rooms_mentor_id'), 'chat_rooms', ['mentor_id'])
    op.create_index(op.f('ix_chat_rooms_patient_id'), 'chat_rooms', ['patient_id'])
    op.create_index(op.f('ix_chat_rooms_created_at'), 'chat_rooms', ['created_at'])

    op.create_table('messages',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('chat_room_id', sa.Uuid(), nullable=False),
        sa.Column('sender_id', sa.Uuid(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['chat_room_id'], ['chat_rooms.id'], ),
        sa.ForeignKeyConstraint(['sender_id'], ['profiles.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_messages_room_time', 'messages', ['chat_room_id', 'created_at'])
    op.create_index(op.f('ix_messages_id'), 'messages', ['id'])
    op.create_index(op.f('ix_messages_chat_room_id'), 'messages', ['chat_room_id'])
    op.create_index(op.f('ix_messages_sender_id'), 'messages', ['sender_id'])
    op.create_index(op.f('ix_messages_created_at'), 'messages', ['created_at'])

def downgrade() -> None:
    op.drop_index(op.f('ix_messages_created_at'), table_name='messages')
    op.drop_index(op.f('ix_messages_sender_id'), table_name='messages')
    op.drop_index(op.f('ix_messages_chat_room_id'), table_name='messages')
    op.drop_index(op.f('ix_messages_id'), table_name='messages')
    op.drop_index('idx_messages_room_time', table_name='messages')
    op.drop_table('messages')

    op.drop_index(op.f('ix_chat_rooms_created_at'), table_name='chat_rooms')
    op.drop_index(op.f('ix_chat_rooms_patient_id'), table_name='chat_rooms')
    op.drop_index(op.f('ix_chat_rooms_mentor_id'), table_name='chat_rooms')
    op.drop_index(op.f('ix_chat_rooms_id'), table_name='chat_rooms')
    op.drop_table('chat_rooms')

    op.drop_index(op.f('ix_mentors_created_at'), table_name='mentors')
    op.drop_index(op.f('ix_mentors_is_available'), table_name='mentors')
    op.drop_index(op.f('ix_mentors_profile_id'), table_name='mentors')
    op.drop_index(op.f('ix_mentors_id'), table_name='mentors')
    op.drop_table('mentors')

    op.drop_index(op.f('ix_profiles_created_at'), table_name='profiles')
    op.drop_index(op.f('ix_profiles_username'), table_name='profiles')
    op.drop_index(op.f('ix_profiles_id'), table_name='profiles')
    op.drop_table('profiles')
