"""create_coaching_and_chat_tables

Revision ID: 5f2c1a9d7e30
Revises:
Create Date: 2026-10-17 09:12:04.118210

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5f2c1a9d7e30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    tables = inspector.get_table_names()

    if 'coaching_prompts' not in tables:
        op.create_table(
            'coaching_prompts',
            sa.Column('coaching_id', sa.String(length=64), primary_key=True),
            sa.Column('context_prompt', sa.Text(), nullable=True),
            sa.Column('api_key', sa.String(length=255), nullable=False),
            sa.Column('model', sa.String(length=128), nullable=False),
            sa.Column('api_provider', sa.String(length=32), nullable=True),
        )

    if 'chat_history' not in tables:
        op.create_table(
            'chat_history',
            sa.Column('chat_id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('user_id', sa.String(length=64), nullable=False),
            sa.Column('coaching_id', sa.String(length=64), nullable=False),
            sa.Column('role', sa.String(length=16), nullable=False),
            sa.Column('message_content', sa.Text(), nullable=False),
            sa.Column('timestamp', sa.DateTime(), nullable=False),
        )
        op.create_index('ix_chat_history_user_id', 'chat_history', ['user_id'])
        op.create_index(
            'ix_chat_history_user_coaching_ts',
            'chat_history',
            ['user_id', 'coaching_id', 'timestamp'],
        )


def downgrade() -> None:
    op.drop_index('ix_chat_history_user_coaching_ts', table_name='chat_history')
    op.drop_index('ix_chat_history_user_id', table_name='chat_history')
    op.drop_table('chat_history')
    op.drop_table('coaching_prompts')
