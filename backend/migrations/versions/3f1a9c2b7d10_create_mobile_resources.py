"""create mobile resource tables

Revision ID: 3f1a9c2b7d10
Revises:
Create Date: 2026-10-18 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '3f1a9c2b7d10'
down_revision = None
branch_labels = None
depends_on = None

EVENT_CATEGORY = sa.Enum('personal', 'work', 'family', 'social', 'health', 'other', name='event_category')
RECURRENCE_TYPE = sa.Enum('daily', 'weekly', 'monthly', 'yearly', name='event_recurrence_type')
REMINDER_TYPE = sa.Enum('notification', 'email', 'sms', name='event_reminder_type')
ATTENDEE_STATUS = sa.Enum('pending', 'accepted', 'declined', name='attendee_status')
EXPENSE_CATEGORY = sa.Enum(
    'food', 'transportation', 'entertainment', 'healthcare', 'education',
    'shopping', 'utilities', 'housing', 'insurance', 'other',
    name='expense_category',
)
PAYMENT_METHOD = sa.Enum('cash', 'card', 'bank_transfer', 'mobile_payment', 'other', name='payment_method')
EXPENSE_STATUS = sa.Enum('pending', 'paid', 'cancelled', name='expense_status')
EXPENSE_RECURRENCE = sa.Enum('daily', 'weekly', 'monthly', 'yearly', name='expense_recurrence_pattern')
SPLIT_TYPE = sa.Enum('equal', 'percentage', 'fixed', 'none', name='expense_split_type')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade():
    op.create_table(
        'calendar_events',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('all_day', sa.Boolean(), nullable=False),
        sa.Column('location', sa.String(length=200), nullable=True),
        sa.Column('is_recurring', sa.Boolean(), nullable=False),
        sa.Column('recurrence_type', RECURRENCE_TYPE, nullable=True),
        sa.Column('recurrence_interval', sa.Integer(), nullable=True),
        sa.Column('recurrence_end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('category', EVENT_CATEGORY, nullable=False),
        sa.Column('color', sa.String(length=7), nullable=True),
        sa.Column('reminder_type', REMINDER_TYPE, nullable=True),
        sa.Column('reminder_minutes_before', sa.Integer(), nullable=True),
        sa.Column('created_by', sa.String(length=64), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_calendar_events')),
    )
    op.create_index('ix_calendar_events_owner_start', 'calendar_events', ['created_by', 'start_time'])

    op.create_table(
        'event_attendees',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=True),
        sa.Column('status', ATTENDEE_STATUS, nullable=False),
        sa.ForeignKeyConstraint(
            ['event_id'], ['calendar_events.id'],
            name=op.f('fk_event_attendees_event_id_calendar_events'), ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_event_attendees')),
    )
    op.create_index(op.f('ix_event_attendees_event_id'), 'event_attendees', ['event_id'])

    op.create_table(
        'circle_types',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('display_name', sa.String(length=100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('icon', sa.String(length=50), nullable=True),
        sa.Column('color', sa.String(length=7), nullable=True),
        sa.Column('default_settings', sa.JSON(), nullable=True),
        sa.Column('is_system', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_circle_types')),
        sa.UniqueConstraint('name', name=op.f('uq_circle_types_name')),
    )

    op.create_table(
        'expenses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('circle_id', sa.String(length=64), nullable=True),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('category', EXPENSE_CATEGORY, nullable=False),
        sa.Column('subcategory', sa.String(length=50), nullable=True),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('payment_method', PAYMENT_METHOD, nullable=False),
        sa.Column('is_recurring', sa.Boolean(), nullable=False),
        sa.Column('recurrence_pattern', EXPENSE_RECURRENCE, nullable=True),
        sa.Column('next_due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', EXPENSE_STATUS, nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('split_type', SPLIT_TYPE, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_expenses')),
    )
    op.create_index('ix_expenses_user_date', 'expenses', ['user_id', 'date'])

    op.create_table(
        'expense_splits',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('expense_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('percentage', sa.Numeric(5, 2), nullable=True),
        sa.ForeignKeyConstraint(
            ['expense_id'], ['expenses.id'],
            name=op.f('fk_expense_splits_expense_id_expenses'), ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_expense_splits')),
    )
    op.create_index(op.f('ix_expense_splits_expense_id'), 'expense_splits', ['expense_id'])

    op.create_table(
        'albums',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('cover_image', sa.String(length=500), nullable=True),
        sa.Column('is_public', sa.Boolean(), nullable=False),
        sa.Column('created_by', sa.String(length=64), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_albums')),
    )
    op.create_index(op.f('ix_albums_created_by'), 'albums', ['created_by'])

    op.create_table(
        'photos',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('filename', sa.String(length=255), nullable=False),
        sa.Column('original_name', sa.String(length=255), nullable=False),
        sa.Column('mime_type', sa.String(length=100), nullable=False),
        sa.Column('size', sa.Integer(), nullable=False),
        sa.Column('url', sa.String(length=500), nullable=False),
        sa.Column('thumbnail_url', sa.String(length=500), nullable=True),
        sa.Column('width', sa.Integer(), nullable=True),
        sa.Column('height', sa.Integer(), nullable=True),
        sa.Column('is_favorite', sa.Boolean(), nullable=False),
        sa.Column('album_id', sa.Integer(), nullable=True),
        sa.Column('uploaded_by', sa.String(length=64), nullable=False),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('metadata', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['album_id'], ['albums.id'],
            name=op.f('fk_photos_album_id_albums'), ondelete='SET NULL',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_photos')),
        sa.UniqueConstraint('filename', name=op.f('uq_photos_filename')),
    )
    op.create_index(op.f('ix_photos_album_id'), 'photos', ['album_id'])
    op.create_index('ix_photos_owner_uploaded', 'photos', ['uploaded_by', 'uploaded_at'])

    op.create_table(
        'photo_shares',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('photo_id', sa.Integer(), nullable=False),
        sa.Column('token', sa.String(length=64), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_by', sa.String(length=64), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(
            ['photo_id'], ['photos.id'],
            name=op.f('fk_photo_shares_photo_id_photos'), ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_photo_shares')),
        sa.UniqueConstraint('token', name=op.f('uq_photo_shares_token')),
    )
    op.create_index(op.f('ix_photo_shares_photo_id'), 'photo_shares', ['photo_id'])


def downgrade():
    op.drop_table('photo_shares')
    op.drop_table('photos')
    op.drop_table('albums')
    op.drop_table('expense_splits')
    op.drop_table('expenses')
    op.drop_table('circle_types')
    op.drop_table('event_attendees')
    op.drop_table('calendar_events')
    bind = op.get_bind()
    for enum in (
        SPLIT_TYPE, EXPENSE_RECURRENCE, EXPENSE_STATUS, PAYMENT_METHOD, EXPENSE_CATEGORY,
        ATTENDEE_STATUS, REMINDER_TYPE, RECURRENCE_TYPE, EVENT_CATEGORY,
    ):
        enum.drop(bind, checkfirst=True)
