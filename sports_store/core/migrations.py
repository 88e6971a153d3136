"""
Versioned schema migrations for the sports store database.

Migrations are applied in version order. Each one runs together with its
schema_migrations marker row inside a single transaction, so a migration is
either recorded as applied or not at all. Re-running is a no-op.

Note: MySQL commits DDL implicitly, so on MySQL a failed migration may leave
earlier statements of that same migration in place. Its marker row is still
not written and the run stops there.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, Set

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Numeric,
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    MetaData,
    Table,
    UniqueConstraint,
    CheckConstraint,
    inspect,
    insert,
    select,
    text,
)
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.sql import func

logger = logging.getLogger(__name__)

_marker_metadata = MetaData()

schema_migrations = Table(
    "schema_migrations",
    _marker_metadata,
    Column("version", Integer, primary_key=True, autoincrement=False),
    Column("name", String(255), nullable=False),
    Column("applied_at", DateTime(timezone=True), nullable=False),
)


@dataclass(frozen=True)
class Migration:
    version: int
    name: str
    upgrade: Callable[[Connection], None]

    @property
    def label(self) -> str:
        return f"{self.version:03d}_{self.name}"


# ===================== Helpers =====================

def _quote(conn: Connection, identifier: str) -> str:
    return conn.dialect.identifier_preparer.quote(identifier)


def _column_names(conn: Connection, table_name: str) -> Set[str]:
    return {column["name"] for column in inspect(conn).get_columns(table_name)}


def _add_column_if_missing(conn: Connection, table_name: str, column_name: str, column_ddl: str) -> bool:
    """ALTER TABLE ... ADD COLUMN unless the column already exists."""
    if column_name in _column_names(conn, table_name):
        logger.info(f"ℹ️ {table_name}.{column_name} already exists, skipping")
        return False
    conn.execute(text(
        f"ALTER TABLE {_quote(conn, table_name)} ADD COLUMN {_quote(conn, column_name)} {column_ddl}"
    ))
    logger.info(f"✅ Added {table_name}.{column_name}")
    return True


def _reflect(conn: Connection, *table_names: str) -> MetaData:
    metadata = MetaData()
    metadata.reflect(bind=conn, only=list(table_names))
    return metadata


# ===================== Migrations =====================

def create_core_tables(conn: Connection) -> None:
    metadata = MetaData()

    Table(
        "users",
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("email", String(255), unique=True, nullable=False),
        Column("password", String(255), nullable=False),
        Column("role", Enum("user", "admin", name="user_role"), server_default="user"),
        Column("name", String(255), nullable=False),
        Column("created_at", DateTime, server_default=func.now()),
    )

    Table(
        "products",
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("name", String(255), nullable=False),
        Column("description", Text),
        Column("price", Numeric(10, 2), nullable=False, server_default="0"),
        Column("image", String(255)),
        Column("images", Text),
        Column("category", String(100)),
        Column("product_type", String(100)),
        Column("sport_type", String(100)),
        Column("stock", Integer, server_default="0"),
        Column("created_at", DateTime, server_default=func.now()),
    )

    Table(
        "cart",
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        Column("product_id", Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
        Column("quantity", Integer, nullable=False, server_default="1"),
        Column("created_at", DateTime, server_default=func.now()),
        UniqueConstraint("user_id", "product_id", name="unique_user_product"),
    )

    Table(
        "orders",
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        Column("total_amount", Numeric(10, 2), nullable=False),
        Column(
            "status",
            Enum("pending", "confirmed", "shipped", "delivered", "cancelled", name="order_status"),
            server_default="pending",
        ),
        Column("shipping_address", Text),
        Column("payment_method", String(50), server_default="cod"),
        Column("notes", Text),
        Column("created_at", DateTime, server_default=func.now()),
        Column("updated_at", DateTime, server_default=func.now()),
    )

    Table(
        "order_items",
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("order_id", Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
        Column("product_id", Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
        Column("quantity", Integer, nullable=False),
        Column("price", Numeric(10, 2), nullable=False),
        Column("created_at", DateTime, server_default=func.now()),
    )

    metadata.create_all(conn)


def create_reviews(conn: Connection) -> None:
    metadata = _reflect(conn, "users", "products", "orders")

    reviews = Table(
        "reviews",
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        Column("product_id", Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
        Column("order_id", Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
        Column("rating", Integer, nullable=False),
        Column("comment", Text),
        Column("created_at", DateTime, server_default=func.now()),
        Column("updated_at", DateTime, server_default=func.now()),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
        UniqueConstraint("user_id", "product_id", "order_id", name="unique_user_product_order"),
    )
    reviews.create(conn, checkfirst=True)

    _add_column_if_missing(conn, "products", "average_rating", "DECIMAL(3,2) DEFAULT 0.00")
    _add_column_if_missing(conn, "products", "total_reviews", "INTEGER DEFAULT 0")


def widen_money_columns(conn: Connection) -> None:
    """Money columns hold whole VND amounts up to 999,999,999,999,999."""
    dialect = conn.dialect.name
    for table_name, column_name in (("products", "price"), ("orders", "total_amount")):
        table, column = _quote(conn, table_name), _quote(conn, column_name)
        if dialect == "mysql":
            conn.execute(text(
                f"ALTER TABLE {table} MODIFY COLUMN {column} DECIMAL(15,0) NOT NULL DEFAULT 0"
            ))
        elif dialect == "postgresql":
            conn.execute(text(f"ALTER TABLE {table} ALTER COLUMN {column} TYPE NUMERIC(15,0)"))
            conn.execute(text(f"ALTER TABLE {table} ALTER COLUMN {column} SET DEFAULT 0"))
        else:
            # SQLite has no column type enforcement
            logger.info(f"ℹ️ {dialect}: {table_name}.{column_name} left as is")
            continue
        logger.info(f"✅ Widened {table_name}.{column_name} to DECIMAL(15,0)")


def create_password_reset_codes(conn: Connection) -> None:
    metadata = _reflect(conn, "users")

    password_reset_codes = Table(
        "password_reset_codes",
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        Column("email", String(255), nullable=False),
        Column("code_hash", String(255), nullable=False),
        Column("expires_at", DateTime, nullable=False),
        Column("attempts", Integer, server_default="0"),
        Column("used", Boolean, server_default="0"),
        Column("created_at", DateTime, server_default=func.now()),
        Column("updated_at", DateTime, server_default=func.now()),
        Index("idx_password_reset_email", "email"),
    )
    password_reset_codes.create(conn, checkfirst=True)


MIGRATIONS: List[Migration] = [
    Migration(1, "create_core_tables", create_core_tables),
    Migration(2, "create_reviews", create_reviews),
    Migration(3, "widen_money_columns", widen_money_columns),
    Migration(4, "create_password_reset_codes", create_password_reset_codes),
]


def validate_migrations(migrations: Sequence[Migration]) -> None:
    """Versions must be unique, positive and strictly increasing."""
    previous = 0
    for migration in migrations:
        if migration.version <= previous:
            raise ValueError(
                f"Migration {migration.label} is out of order (previous version {previous})"
            )
        previous = migration.version


validate_migrations(MIGRATIONS)


# ===================== Runner =====================

def applied_versions(connection: Connection) -> Set[int]:
    return set(connection.execute(select(schema_migrations.c.version)).scalars())


def current_version(engine: Engine) -> int:
    """Highest applied version, 0 for a database never migrated. Read-only."""
    with engine.connect() as conn:
        if not inspect(conn).has_table(schema_migrations.name):
            return 0
        return max(applied_versions(conn), default=0)


def pending_migrations(engine: Engine, migrations: Optional[Sequence[Migration]] = None) -> List[Migration]:
    """Migrations not yet recorded as applied. Read-only."""
    migrations = MIGRATIONS if migrations is None else migrations
    with engine.connect() as conn:
        if inspect(conn).has_table(schema_migrations.name):
            done = applied_versions(conn)
        else:
            done = set()
    return [m for m in migrations if m.version not in done]


def apply_migrations(
    engine: Engine,
    target: Optional[int] = None,
    migrations: Optional[Sequence[Migration]] = None,
) -> List[int]:
    """
    Apply pending migrations up to and including `target` (all when None).

    Returns:
        list: versions applied by this run, in order
    """
    if migrations is not None:
        validate_migrations(migrations)

    with engine.begin() as conn:
        schema_migrations.create(conn, checkfirst=True)

    applied: List[int] = []
    for migration in pending_migrations(engine, migrations):
        if target is not None and migration.version > target:
            break
        logger.info(f"🔄 Applying migration {migration.label}")
        with engine.begin() as conn:
            migration.upgrade(conn)
            conn.execute(insert(schema_migrations).values(
                version=migration.version,
                name=migration.name,
                applied_at=datetime.now(timezone.utc),
            ))
        applied.append(migration.version)
        logger.info(f"✅ Migration {migration.label} applied")
    return applied
