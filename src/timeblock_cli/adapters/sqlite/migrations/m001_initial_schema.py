"""Migration 001: the tasks table and its start-time index."""

from timeblock_cli.adapters.sqlite import schema

from .runner import Migration

initial_migration = Migration(
    version=1,
    description="Create tasks table",
    statements=(*schema.ALL_TABLES, *schema.ALL_INDEXES),
)
