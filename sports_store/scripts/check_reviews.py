#!/usr/bin/env python3
"""
Print stored reviews and the rating columns of every product.

  python -m sports_store.scripts.check_reviews
  python -m sports_store.scripts.check_reviews --database-url sqlite:///./store.db
"""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from sports_store.models.database_models import Product, Review, User

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def list_reviews(db: Session) -> List[Dict[str, Any]]:
    """Reviews newest first, with product and user names."""
    rows = db.execute(
        select(Review, Product.name, User.name)
        .outerjoin(Product, Review.product_id == Product.id)
        .outerjoin(User, Review.user_id == User.id)
        .order_by(Review.created_at.desc(), Review.id.desc())
    ).all()
    return [
        {
            "id": review.id,
            "product_id": review.product_id,
            "product_name": product_name,
            "user_name": user_name,
            "rating": review.rating,
            "comment": review.comment,
            "created_at": review.created_at,
        }
        for review, product_name, user_name in rows
    ]


def list_product_ratings(db: Session) -> List[Dict[str, Any]]:
    products = db.execute(select(Product).order_by(Product.id)).scalars().all()
    return [
        {
            "id": p.id,
            "name": p.name,
            "average_rating": float(p.average_rating or 0),
            "total_reviews": p.total_reviews or 0,
        }
        for p in products
    ]


def print_report(db: Session) -> None:
    print("⭐ Reviews in database:")
    for review in list_reviews(db):
        print(f"  Product: {review['product_name']} (ID: {review['product_id']})")
        print(f"  User: {review['user_name']}, Rating: {review['rating']}/5")
        print(f"  Comment: {review['comment'] or 'No comment'}")
        print(f"  Date: {review['created_at']}")
        print("  ---")

    print("\n📦 Products with ratings:")
    for product in list_product_ratings(db):
        print(f"  {product['name']} (ID: {product['id']})")
        print(f"  Average Rating: {product['average_rating']}")
        print(f"  Total Reviews: {product['total_reviews']}")
        print("  ---")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Show reviews and product ratings")
    parser.add_argument("--database-url", type=str, default=None, help="SQLAlchemy URL (defaults to settings)")
    args = parser.parse_args(argv)

    from sports_store.core.config import settings
    from sports_store.core.database import create_db_engine

    engine = create_db_engine(args.database_url or settings.database_url)
    try:
        with sessionmaker(bind=engine)() as db:
            print_report(db)
        return 0
    except Exception as e:
        logger.exception(f"❌ Error reading reviews: {e}")
        return 1
    finally:
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
