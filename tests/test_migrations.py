from decimal import Decimal

import pytest
from sqlalchemy import delete, inspect, select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sports_store.core.database import init_db
from sports_store.core.migrations import (
    MIGRATIONS,
    Migration,
    apply_migrations,
    current_version,
    pending_migrations,
    schema_migrations,
    validate_migrations,
)
from sports_store.models import CartItem, Order, OrderStatus, Product, Review, User, UserRole
from sports_store.scripts import check_reviews, migrate


@pytest.fixture
def migrated_engine(sqlite_engine):
    apply_migrations(sqlite_engine)
    return sqlite_engine


@pytest.fixture
def seeded(migrated_engine):
    with Session(migrated_engine) as db:
        user = User(email="an@example.com", password="hashed", name="An")
        product = Product(name="Giày chạy bộ", price=Decimal("1500000"), category="giay",
                          product_type="giay-running", sport_type="running", stock=5)
        db.add_all([user, product])
        db.flush()
        order = Order(user_id=user.id, total_amount=Decimal("1500000"))
        db.add(order)
        db.flush()
        db.add(Review(user_id=user.id, product_id=product.id, order_id=order.id, rating=5, comment="Rất tốt"))
        db.commit()
        return {"user_id": user.id, "product_id": product.id, "order_id": order.id}


def test_apply_all_then_rerun_is_noop(sqlite_engine):
    assert current_version(sqlite_engine) == 0

    assert apply_migrations(sqlite_engine) == [1, 2, 3, 4]
    assert current_version(sqlite_engine) == 4
    assert apply_migrations(sqlite_engine) == []
    assert pending_migrations(sqlite_engine) == []


def test_schema_after_migrations(migrated_engine):
    inspector = inspect(migrated_engine)
    tables = set(inspector.get_table_names())
    assert {"users", "products", "cart", "orders", "order_items", "reviews",
            "password_reset_codes", "schema_migrations"} <= tables

    product_columns = {c["name"] for c in inspector.get_columns("products")}
    assert {"average_rating", "total_reviews"} <= product_columns

    index_names = {i["name"] for i in inspector.get_indexes("password_reset_codes")}
    assert "idx_password_reset_email" in index_names


def test_markers_record_name_and_time(migrated_engine):
    with migrated_engine.connect() as conn:
        rows = conn.execute(select(schema_migrations).order_by(schema_migrations.c.version)).all()
    assert [(r.version, r.name) for r in rows] == [(m.version, m.name) for m in MIGRATIONS]
    assert all(r.applied_at is not None for r in rows)


def test_apply_up_to_target(sqlite_engine):
    assert apply_migrations(sqlite_engine, target=2) == [1, 2]
    assert current_version(sqlite_engine) == 2
    assert [m.version for m in pending_migrations(sqlite_engine)] == [3, 4]

    assert apply_migrations(sqlite_engine) == [3, 4]


def test_adopts_database_created_before_versioning(sqlite_engine):
    with sqlite_engine.begin() as conn:
        conn.execute(text(
            "CREATE TABLE users (id INTEGER PRIMARY KEY, email VARCHAR(255) UNIQUE NOT NULL, "
            "password VARCHAR(255) NOT NULL, role VARCHAR(10) DEFAULT 'user', name VARCHAR(255) NOT NULL, "
            "created_at DATETIME)"
        ))
        conn.execute(text(
            "CREATE TABLE products (id INTEGER PRIMARY KEY, name VARCHAR(255) NOT NULL, description TEXT, "
            "price DECIMAL(10,2) NOT NULL DEFAULT 0, image VARCHAR(255), images TEXT, category VARCHAR(100), "
            "product_type VARCHAR(100), sport_type VARCHAR(100), stock INTEGER DEFAULT 0, created_at DATETIME, "
            "average_rating DECIMAL(3,2) DEFAULT 0.00)"
        ))
        conn.execute(text("INSERT INTO products (id, name, price) VALUES (1, 'Bóng rổ', 450000)"))

    assert apply_migrations(sqlite_engine) == [1, 2, 3, 4]

    with sqlite_engine.connect() as conn:
        row = conn.execute(text("SELECT name, total_reviews FROM products WHERE id = 1")).one()
    assert row.name == "Bóng rổ"
    assert row.total_reviews == 0


def test_failed_migration_is_not_recorded(migrated_engine):
    def broken(conn):
        conn.execute(text("SELECT 1"))
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        apply_migrations(migrated_engine, migrations=MIGRATIONS + [Migration(5, "broken", broken)])

    assert current_version(migrated_engine) == 4


def test_validate_rejects_out_of_order_versions():
    noop = lambda conn: None  # noqa: E731
    with pytest.raises(ValueError):
        validate_migrations([Migration(2, "b", noop), Migration(1, "a", noop)])
    with pytest.raises(ValueError):
        validate_migrations([Migration(1, "a", noop), Migration(1, "again", noop)])
    with pytest.raises(ValueError):
        validate_migrations([Migration(0, "zero", noop)])


def test_init_db_uses_given_engine(sqlite_engine):
    assert init_db(sqlite_engine) == [1, 2, 3, 4]
    assert init_db(sqlite_engine) == []


def test_orm_defaults(migrated_engine, seeded):
    with Session(migrated_engine) as db:
        user = db.get(User, seeded["user_id"])
        order = db.get(Order, seeded["order_id"])
        product = db.get(Product, seeded["product_id"])

        assert user.role == UserRole.USER
        assert order.status == OrderStatus.PENDING
        assert order.payment_method == "cod"
        assert product.to_dict()["price"] == 1500000
        assert [r.rating for r in product.reviews] == [5]


def test_rating_must_be_between_one_and_five(migrated_engine, seeded):
    with Session(migrated_engine) as db:
        db.add(Review(user_id=seeded["user_id"], product_id=seeded["product_id"], order_id=seeded["order_id"],
                      rating=6))
        with pytest.raises(IntegrityError):
            db.commit()


def test_one_review_per_user_product_order(migrated_engine, seeded):
    with Session(migrated_engine) as db:
        db.add(Review(user_id=seeded["user_id"], product_id=seeded["product_id"], order_id=seeded["order_id"],
                      rating=3))
        with pytest.raises(IntegrityError):
            db.commit()


def test_one_cart_row_per_user_product(migrated_engine, seeded):
    with Session(migrated_engine) as db:
        db.add(CartItem(user_id=seeded["user_id"], product_id=seeded["product_id"]))
        db.commit()
        db.add(CartItem(user_id=seeded["user_id"], product_id=seeded["product_id"], quantity=2))
        with pytest.raises(IntegrityError):
            db.commit()


def test_deleting_user_cascades_to_orders_and_reviews(migrated_engine, seeded):
    with Session(migrated_engine) as db:
        db.execute(delete(User).where(User.id == seeded["user_id"]))
        db.commit()

        assert db.scalars(select(Order)).all() == []
        assert db.scalars(select(Review)).all() == []
        assert db.get(Product, seeded["product_id"]) is not None


def test_check_reviews_listing(migrated_engine, seeded):
    with Session(migrated_engine) as db:
        reviews = check_reviews.list_reviews(db)
        ratings = check_reviews.list_product_ratings(db)

    assert len(reviews) == 1
    assert reviews[0]["product_name"] == "Giày chạy bộ"
    assert reviews[0]["user_name"] == "An"
    assert reviews[0]["rating"] == 5
    assert ratings == [{"id": seeded["product_id"], "name": "Giày chạy bộ", "average_rating": 0.0,
                        "total_reviews": 0}]


def test_check_reviews_main(database_url, seeded, capsys):
    assert check_reviews.main(["--database-url", database_url]) == 0
    out = capsys.readouterr().out
    assert "⭐ Reviews in database:" in out
    assert "User: An, Rating: 5/5" in out
    assert "📦 Products with ratings:" in out


def test_migrate_cli(database_url, capsys):
    assert migrate.main(["--database-url", database_url, "--target", "1"]) == 0

    assert migrate.main(["--database-url", database_url, "--status"]) == 0
    out = capsys.readouterr().out
    assert "[applied] 001_create_core_tables" in out
    assert "[pending] 004_create_password_reset_codes" in out

    assert migrate.main(["--database-url", database_url]) == 0
    migrate.main(["--database-url", database_url, "--status"])
    assert "[pending]" not in capsys.readouterr().out


def test_migrate_cli_reports_failure(tmp_path):
    missing_dir_url = f"sqlite:///{tmp_path / 'missing' / 'store.db'}"
    assert migrate.main(["--database-url", missing_dir_url]) == 1


def test_pending_on_fresh_database_does_not_create_marker_table(sqlite_engine):
    assert [m.version for m in pending_migrations(sqlite_engine)] == [1, 2, 3, 4]
    assert not inspect(sqlite_engine).has_table("schema_migrations")


def test_migrate_status_leaves_database_untouched(database_url, sqlite_engine, capsys):
    assert migrate.main(["--database-url", database_url, "--status"]) == 0

    assert "[pending] 001_create_core_tables" in capsys.readouterr().out
    assert inspect(sqlite_engine).get_table_names() == []
