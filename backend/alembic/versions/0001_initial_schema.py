"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates all tables for the voting rooms service:
groups, invites, categories, nominees, ballots, votes.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- groups ---
    op.create_table(
        "groups",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("code", sa.String(16), nullable=False, unique=True),
        sa.Column("title", sa.String(150), nullable=False),
        sa.Column("max_members", sa.Integer, nullable=False),
        sa.Column("reveal_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_groups_code", "groups", ["code"])

    # --- invites ---
    op.create_table(
        "invites",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("group_id", sa.String(36), sa.ForeignKey("groups.id", ondelete="CASCADE"), nullable=False),
        sa.Column("token", sa.String(128), nullable=False, unique=True),
        sa.Column("display_name", sa.String(100), nullable=False),
        sa.Column("role", sa.String(10), nullable=False, server_default="guest"),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_invites_group_id", "invites", ["group_id"])
    op.create_index("ix_invites_token", "invites", ["token"])

    # --- categories ---
    op.create_table(
        "categories",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("group_id", sa.String(36), sa.ForeignKey("groups.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("sort_order", sa.Integer, nullable=False),
    )
    op.create_index("ix_categories_group_id", "categories", ["group_id"])

    # --- nominees ---
    op.create_table(
        "nominees",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("category_id", sa.String(36), sa.ForeignKey("categories.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("sort_order", sa.Integer, nullable=False),
    )
    op.create_index("ix_nominees_category_id", "nominees", ["category_id"])

    # --- ballots ---
    op.create_table(
        "ballots",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("group_id", sa.String(36), sa.ForeignKey("groups.id", ondelete="CASCADE"), nullable=False),
        sa.Column("invite_id", sa.String(36), sa.ForeignKey("invites.id", ondelete="CASCADE"), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_ballots_group_id", "ballots", ["group_id"])

    # --- votes ---
    op.create_table(
        "votes",
        sa.Column("ballot_id", sa.String(36), sa.ForeignKey("ballots.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("category_id", sa.String(36), sa.ForeignKey("categories.id"), primary_key=True),
        sa.Column("nominee_id", sa.String(36), sa.ForeignKey("nominees.id"), nullable=False),
    )
    op.create_index("ix_votes_nominee_id", "votes", ["nominee_id"])


def downgrade() -> None:
    op.drop_table("votes")
    op.drop_table("ballots")
    op.drop_table("nominees")
    op.drop_table("categories")
    op.drop_table("invites")
    op.drop_table("groups")
