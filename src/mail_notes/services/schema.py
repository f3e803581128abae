"""
Schema Initializer

Brings the ``notes`` table up to the shape the running code expects, using
an ordered list of additive, idempotent migration steps. Runs once at startup
before the API accepts traffic.

Each step pairs a presence check against the live schema (SQLAlchemy
inspector) with an additive DDL action (alembic Operations). Steps whose
target already exists are skipped, so the routine is safe on an empty
database, on a fully migrated one, and on tables created by older revisions
with a subset of the columns. Row data is never touched, and columns unknown
to this code (e.g. the legacy ``color``) are left in place.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import sqlalchemy as sa
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy.engine import Connection, Inspector
from sqlalchemy.ext.asyncio import AsyncEngine

from mail_notes.models.note import (
    DEFAULT_CREATED_BY,
    DEFAULT_TAG_COLOR,
    DEFAULT_TAG_NAME,
)

logger = logging.getLogger(__name__)

NOTES_TABLE = "notes"
MESSAGE_ID_INDEX = "ix_notes_message_id"


@dataclass(frozen=True)
class MigrationStep:
    """
    A single additive schema change.

    Attributes:
        name: Stable identifier, used in logs and returned by ensure_schema.
        is_applied: Presence check run against a fresh inspector.
        apply: DDL action; only called when is_applied returned False.
    """

    name: str
    is_applied: Callable[[Inspector], bool]
    apply: Callable[[Operations], None]


def _has_table(inspector: Inspector) -> bool:
    return inspector.has_table(NOTES_TABLE)


def _create_notes_table(op: Operations) -> None:
    op.create_table(
        NOTES_TABLE,
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("message_id", sa.Text(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_notes"),
    )


def _add_column_step(name: str, column: Callable[[], sa.Column]) -> MigrationStep:
    """
    Step adding one column when absent.

    ``column`` is a factory: alembic binds the Column to a throwaway Table,
    so every application needs a fresh instance.
    """
    column_name = column().name

    def is_applied(inspector: Inspector) -> bool:
        return any(c["name"] == column_name for c in inspector.get_columns(NOTES_TABLE))

    def apply(op: Operations) -> None:
        op.add_column(NOTES_TABLE, column())

    return MigrationStep(name=name, is_applied=is_applied, apply=apply)


def _has_message_id_index(inspector: Inspector) -> bool:
    return any(ix["name"] == MESSAGE_ID_INDEX for ix in inspector.get_indexes(NOTES_TABLE))


def _create_message_id_index(op: Operations) -> None:
    op.create_index(MESSAGE_ID_INDEX, NOTES_TABLE, ["message_id"])


# Order matters: every step after the first assumes the table exists.
MIGRATIONS: tuple[MigrationStep, ...] = (
    MigrationStep("create_notes_table", _has_table, _create_notes_table),
    _add_column_step(
        "add_tag_name",
        lambda: sa.Column(
            "tag_name", sa.Text(), nullable=False, server_default=DEFAULT_TAG_NAME
        ),
    ),
    _add_column_step(
        "add_tag_color",
        lambda: sa.Column(
            "tag_color", sa.Text(), nullable=False, server_default=DEFAULT_TAG_COLOR
        ),
    ),
    _add_column_step(
        "add_snippet_key",
        lambda: sa.Column("snippet_key", sa.Text(), nullable=True),
    ),
    _add_column_step(
        "add_created_by",
        lambda: sa.Column(
            "created_by",
            sa.Text(),
            nullable=False,
            server_default=DEFAULT_CREATED_BY,
        ),
    ),
    MigrationStep(
        "create_message_id_index", _has_message_id_index, _create_message_id_index
    ),
)


def apply_migrations(
    connection: Connection,
    steps: Sequence[MigrationStep] = MIGRATIONS,
) -> list[str]:
    """
    Run every pending step on a synchronous connection.

    A new inspector is taken per step since inspectors cache reflection
    results and earlier steps change the schema.

    Returns:
        Names of the steps that were applied, in order.
    """
    operations = Operations(MigrationContext.configure(connection))
    applied: list[str] = []
    for step in steps:
        if step.is_applied(sa.inspect(connection)):
            logger.debug("Schema step %s already applied", step.name)
            continue
        logger.info("Applying schema step %s", step.name)
        step.apply(operations)
        applied.append(step.name)
    return applied


async def ensure_schema(
    engine: AsyncEngine,
    steps: Sequence[MigrationStep] = MIGRATIONS,
) -> list[str]:
    """
    Bring the notes table up to date.

    All steps run in a single transaction; any failure propagates to the
    caller, which must treat it as fatal.

    Args:
        engine: Async engine of the note store.
        steps: Ordered migration steps (defaults to MIGRATIONS).

    Returns:
        Names of the steps applied by this call (empty when up to date).
    """
    async with engine.begin() as conn:
        applied = await conn.run_sync(apply_migrations, steps)

    if applied:
        logger.info("Schema migrated: %s", ", ".join(applied))
    else:
        logger.info("Schema up to date")
    return applied
