"""create noticeboard tables

Revision ID: 7c1e4a9d2b10
Revises:
Create Date: 2026-10-17 09:12:44.301518

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7c1e4a9d2b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=True),
        sa.Column('role', sa.String(length=50), nullable=False),
        sa.Column('teacher_id', sa.String(length=36), nullable=True),
        sa.Column('section_id', sa.String(length=36), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index('idx_users_role', 'users', ['role'], unique=False)
    op.create_index('idx_users_teacher_id', 'users', ['teacher_id'], unique=False)

    op.create_table(
        'sections',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('subject_id', sa.String(length=36), nullable=True),
        sa.Column('subject_name', sa.String(length=200), nullable=True),
        sa.Column('department_id', sa.String(length=36), nullable=True),
        sa.Column('class_teacher_id', sa.String(length=36), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_sections_class_teacher_id', 'sections', ['class_teacher_id'], unique=False)

    op.create_table(
        'timetable_entries',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('teacher_id', sa.String(length=36), nullable=False),
        sa.Column('section_id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['section_id'], ['sections.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_timetable_entries_teacher_id', 'timetable_entries', ['teacher_id'], unique=False)

    op.create_table(
        'notices',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=300), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('author_id', sa.String(length=36), nullable=False),
        sa.Column('target', sa.String(length=100), nullable=False),
        sa.Column('kind', sa.String(length=20), nullable=False),
        sa.Column('message_type', sa.String(length=10), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("kind in ('notice','private_message')", name='ck_notices_kind'),
        sa.CheckConstraint("message_type in ('text','image','audio')", name='ck_notices_message_type'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_notices_date', 'notices', ['date'], unique=False)
    op.create_index('idx_notices_author_id', 'notices', ['author_id'], unique=False)
    op.create_index('idx_notices_target', 'notices', ['target'], unique=False)

    op.create_table(
        'notice_reactions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('notice_id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('type', sa.String(length=10), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("type in ('like','heart','haha','crying')", name='ck_notice_reactions_type'),
        sa.ForeignKeyConstraint(['notice_id'], ['notices.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_notice_reactions_unique', 'notice_reactions', ['notice_id', 'user_id'], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_notice_reactions_unique', table_name='notice_reactions')
    op.drop_table('notice_reactions')
    op.drop_index('idx_notices_target', table_name='notices')
    op.drop_index('idx_notices_author_id', table_name='notices')
    op.drop_index('idx_notices_date', table_name='notices')
    op.drop_table('notices')
    op.drop_index('idx_timetable_entries_teacher_id', table_name='timetable_entries')
    op.drop_table('timetable_entries')
    op.drop_index('idx_sections_class_teacher_id', table_name='sections')
    op.drop_table('sections')
    op.drop_index('idx_users_teacher_id', table_name='users')
    op.drop_index('idx_users_role', table_name='users')
    op.drop_table('users')
