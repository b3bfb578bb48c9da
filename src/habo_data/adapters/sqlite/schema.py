"""Database schema definitions for the local habit database.

Event and category links reference habits by id without a foreign key:
habits may live on the remote backend while events stay local.
"""

from __future__ import annotations

# Schema version tracking
SCHEMA_VERSION = 3

# Habits table
CREATE_HABITS_TABLE = """
CREATE TABLE IF NOT EXISTS habits (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    position INTEGER NOT NULL DEFAULT 0,
    habit_type TEXT NOT NULL DEFAULT 'boolean',
    target_value REAL NOT NULL DEFAULT 100.0,
    partial_value REAL NOT NULL DEFAULT 10.0,
    unit TEXT NOT NULL DEFAULT '',
    archived BOOLEAN NOT NULL DEFAULT 0,
    notification BOOLEAN NOT NULL DEFAULT 0,
    notification_time TEXT NOT NULL DEFAULT '08:00',
    two_day_rule BOOLEAN NOT NULL DEFAULT 0,
    cue TEXT NOT NULL DEFAULT '',
    routine TEXT NOT NULL DEFAULT '',
    reward TEXT NOT NULL DEFAULT '',
    show_reward BOOLEAN NOT NULL DEFAULT 0,
    advanced BOOLEAN NOT NULL DEFAULT 0,
    sanction TEXT NOT NULL DEFAULT '',
    show_sanction BOOLEAN NOT NULL DEFAULT 0,
    accountant TEXT NOT NULL DEFAULT ''
)
"""

# Events table - one row per habit and day, payload stored as JSON
CREATE_EVENTS_TABLE = """
CREATE TABLE IF NOT EXISTS events (
    habit_id INTEGER NOT NULL,
    day TEXT NOT NULL,
    payload TEXT NOT NULL DEFAULT '[]',
    PRIMARY KEY (habit_id, day)
)
"""

# Categories table
CREATE_CATEGORIES_TABLE = """
CREATE TABLE IF NOT EXISTS categories (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL
)
"""

# Habit-category junction table
CREATE_HABIT_CATEGORIES_TABLE = """
CREATE TABLE IF NOT EXISTS habit_categories (
    habit_id INTEGER NOT NULL,
    category_id INTEGER NOT NULL,
    PRIMARY KEY (habit_id, category_id),
    FOREIGN KEY (category_id) REFERENCES categories(id) ON DELETE CASCADE
)
"""

# Rules table
CREATE_RULES_TABLE = """
CREATE TABLE IF NOT EXISTS rules (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    habit TEXT NOT NULL,
    day INTEGER NOT NULL CHECK (day BETWEEN 0 AND 6),
    hour INTEGER NOT NULL CHECK (hour BETWEEN 0 AND 23),
    minute INTEGER NOT NULL CHECK (minute BETWEEN 0 AND 59),
    active BOOLEAN NOT NULL DEFAULT 1
)
"""

# Logs table
CREATE_LOGS_TABLE = """
CREATE TABLE IF NOT EXISTS logs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    habit_name TEXT NOT NULL,
    state TEXT NOT NULL,
    reported BOOLEAN NOT NULL DEFAULT 1,
    created_at DATETIME NOT NULL
)
"""

CREATE_HABIT_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_habits_position ON habits(position)",
    "CREATE INDEX IF NOT EXISTS idx_habits_title ON habits(title)",
]

CREATE_CATEGORY_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_habit_categories_category ON habit_categories(category_id)",
]

CREATE_RULE_LOG_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_rules_habit ON rules(habit)",
    "CREATE INDEX IF NOT EXISTS idx_logs_habit_name ON logs(habit_name)",
]

ALL_TABLES = [
    CREATE_HABITS_TABLE,
    CREATE_EVENTS_TABLE,
    CREATE_CATEGORIES_TABLE,
    CREATE_HABIT_CATEGORIES_TABLE,
    CREATE_RULES_TABLE,
    CREATE_LOGS_TABLE,
]

ALL_INDEXES = CREATE_HABIT_INDEXES + CREATE_CATEGORY_INDEXES + CREATE_RULE_LOG_INDEXES


def initialize_schema(connection) -> None:
    """Create every table and index directly, bypassing migrations.

    Args:
        connection: SQLite database connection
    """
    for table_sql in ALL_TABLES:
        connection.execute(table_sql)
    for index_sql in ALL_INDEXES:
        connection.execute(index_sql)
    connection.commit()
