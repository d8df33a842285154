"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

Users, habits, completions, reflections and the tactic catalogue.
Seeds a starter set of tactics, one or more per habit-loop stage.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- ENUM types ---
    habit_stage = sa.Enum("cue", "craving", "response", "reward", name="habit_stage")
    habit_stage.create(op.get_bind(), checkfirst=True)

    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("completed_onboarding", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"])

    # --- habits ---
    op.create_table(
        "habits",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("icon_url", sa.Text(), nullable=False),
        sa.Column("fail_reflection_limit", sa.Integer(), nullable=False),
        sa.Column("cue", sa.Text(), nullable=False),
        sa.Column("craving", sa.Text(), nullable=False),
        sa.Column("response", sa.Text(), nullable=False),
        sa.Column("reward", sa.Text(), nullable=False),
        sa.Column("build", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_habits_id", "habits", ["id"])
    op.create_index("ix_habits_user_id", "habits", ["user_id"])

    # --- habit_completions ---
    op.create_table(
        "habit_completions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("habit_id", sa.Integer(), sa.ForeignKey("habits.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_habit_completions_id", "habit_completions", ["id"])
    op.create_index("ix_habit_completions_habit_id", "habit_completions", ["habit_id"])
    op.create_index("ix_habit_completions_date", "habit_completions", ["date"])

    # --- reflections ---
    op.create_table(
        "reflections",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("habit_id", sa.Integer(), sa.ForeignKey("habits.id", ondelete="CASCADE"), nullable=False),
        sa.Column("experience", sa.Text(), nullable=False),
        sa.Column("reflection", sa.Text(), nullable=False),
        sa.Column("bottleneck", sa.Enum(
            "cue", "craving", "response", "reward", name="habit_stage", create_type=False,
        ), nullable=False),
        sa.Column("experiment", sa.Text(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_reflections_id", "reflections", ["id"])
    op.create_index("ix_reflections_habit_id", "reflections", ["habit_id"])
    op.create_index("ix_reflections_date", "reflections", ["date"])

    # --- tactics ---
    op.create_table(
        "tactics",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("icon_url", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("part_of_habit", sa.Enum(
            "cue", "craving", "response", "reward", name="habit_stage", create_type=False,
        ), nullable=False),
        sa.Column("build", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tactics_id", "tactics", ["id"])
    op.create_index("ix_tactics_part_of_habit", "tactics", ["part_of_habit"])

    # --- reflection_tactics (junction) ---
    op.create_table(
        "reflection_tactics",
        sa.Column("reflection_id", sa.Integer(), sa.ForeignKey("reflections.id", ondelete="CASCADE"), nullable=False),
        sa.Column("tactic_id", sa.Integer(), sa.ForeignKey("tactics.id", ondelete="CASCADE"), nullable=False),
        sa.PrimaryKeyConstraint("reflection_id", "tactic_id"),
    )

    # --- seed starter tactics ---
    op.execute("""
        INSERT INTO tactics (name, icon_url, description, part_of_habit, build)
        VALUES
          ('Implementation intention', 'icons/calendar.svg', 'I will [behavior] at [time] in [location].', 'cue', true),
          ('Habit stacking', 'icons/stack.svg', 'After [current habit], I will [new habit].', 'cue', true),
          ('Design your environment', 'icons/home.svg', 'Make the cue for the habit visible.', 'cue', true),
          ('Temptation bundling', 'icons/gift.svg', 'Pair an action you want to do with one you need to do.', 'craving', true),
          ('Join a culture', 'icons/people.svg', 'Spend time with people for whom the habit is normal.', 'craving', true),
          ('Two-minute rule', 'icons/timer.svg', 'Scale the habit down until it takes two minutes or less.', 'response', true),
          ('Reduce friction', 'icons/path.svg', 'Decrease the number of steps between you and the habit.', 'response', true),
          ('Habit tracker', 'icons/check.svg', 'Track the habit and never miss twice.', 'reward', true),
          ('Immediate reward', 'icons/star.svg', 'Give yourself a small reward right after completing the habit.', 'reward', true),
          ('Make it invisible', 'icons/eye-off.svg', 'Remove the cues of the bad habit from your environment.', 'cue', false),
          ('Reframe the mindset', 'icons/brain.svg', 'Highlight the benefits of avoiding the bad habit.', 'craving', false),
          ('Increase friction', 'icons/lock.svg', 'Add steps between you and the bad habit.', 'response', false),
          ('Accountability partner', 'icons/handshake.svg', 'Make the cost of the bad habit public and painful.', 'reward', false)
    """)


def downgrade() -> None:
    op.drop_table("reflection_tactics")
    op.drop_table("tactics")
    op.drop_table("reflections")
    op.drop_table("habit_completions")
    op.drop_table("habits")
    op.drop_table("users")

    op.execute("DROP TYPE IF EXISTS habit_stage")
