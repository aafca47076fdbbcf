"""create admin, quiz, question and option tables

Revision ID: 3c7d9e1f2a4b
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c7d9e1f2a4b'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    existing_tables = set(sa.inspect(bind).get_table_names())

    if 'admin' not in existing_tables:
        op.create_table(
            'admin',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('username', sa.String(length=64), nullable=False),
            sa.Column('password_hash', sa.String(length=256), nullable=False),
        )
        op.create_index('ix_admin_username', 'admin', ['username'], unique=True)

    if 'quiz' not in existing_tables:
        op.create_table(
            'quiz',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('title', sa.String(length=128), nullable=False),
        )

    if 'question' not in existing_tables:
        op.create_table(
            'question',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('quiz_id', sa.Integer(), sa.ForeignKey('quiz.id'), nullable=False),
            sa.Column('text', sa.Text(), nullable=False),
            sa.Column('order', sa.Integer(), nullable=False),
            sa.Column('type', sa.String(length=32), nullable=False, server_default='MULTIPLE_CHOICE'),
            sa.Column('image_url', sa.String(length=512), nullable=True),
            sa.Column('min_value', sa.Float(), nullable=True),
            sa.Column('max_value', sa.Float(), nullable=True),
            sa.Column('correct_value', sa.Float(), nullable=True),
            sa.UniqueConstraint('quiz_id', 'order', name='uq_question_quiz_order'),
        )
        op.create_index('ix_question_quiz_id', 'question', ['quiz_id'])

    if 'option' not in existing_tables:
        op.create_table(
            'option',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('question_id', sa.Integer(), sa.ForeignKey('question.id'), nullable=False),
            sa.Column('text', sa.String(length=256), nullable=False),
            sa.Column('is_correct', sa.Boolean(), nullable=False, server_default=sa.false()),
        )
        op.create_index('ix_option_question_id', 'option', ['question_id'])


def downgrade():
    op.drop_index('ix_option_question_id', table_name='option')
    op.drop_table('option')
    op.drop_index('ix_question_quiz_id', table_name='question')
    op.drop_table('question')
    op.drop_table('quiz')
    op.drop_index('ix_admin_username', table_name='admin')
    op.drop_table('admin')
