"""SQLite store for products, categories and collections.

Local counterpart of ``db/schema.sql``. Writes go through
``catalog.access.check_access`` so the row-level policies hold here too.
"""

import json
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

from catalog.access import (
    DELETE,
    INSERT,
    UPDATE,
    Principal,
    check_access,
)
from catalog.config import DB_PATH
from catalog.models import Color, Product

__all__ = [
    "get_connection",
    "init_db",
    "upsert_product",
    "delete_product",
    "get_product",
    "get_all_products",
    "get_product_count",
    "upsert_category",
    "get_categories",
    "create_collection",
    "add_product_to_collection",
    "remove_product_from_collection",
    "get_collection_products",
]

_NOW = "strftime('%Y-%m-%d %H:%M:%f', 'now')"
_NEW_ID = "lower(hex(randomblob(16)))"


@contextmanager
def get_connection(db_path: str = DB_PATH) -> Generator[sqlite3.Connection, None, None]:
    """Context manager for database connections with foreign keys enforced."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
    finally:
        conn.close()


def init_db(db_path: str = DB_PATH) -> None:
    """Initialize the database schema."""
    with get_connection(db_path) as conn:
        cursor = conn.cursor()

        cursor.execute(f"""
            CREATE TABLE IF NOT EXISTS products (
                id TEXT PRIMARY KEY DEFAULT ({_NEW_ID}),
                name TEXT NOT NULL,
                description TEXT,
                price REAL NOT NULL CHECK (price >= 0),
                original_price REAL CHECK (original_price >= 0),
                category TEXT NOT NULL,
                image_url TEXT NOT NULL,
                image_urls TEXT NOT NULL DEFAULT '[]',
                tags TEXT NOT NULL DEFAULT '[]',
                sizes TEXT NOT NULL DEFAULT '[]',
                colors TEXT NOT NULL DEFAULT '[]',
                in_stock INTEGER NOT NULL DEFAULT 1,
                is_new INTEGER NOT NULL DEFAULT 0,
                is_limited INTEGER NOT NULL DEFAULT 0,
                created_at TEXT NOT NULL DEFAULT ({_NOW}),
                updated_at TEXT NOT NULL DEFAULT ({_NOW})
            )
        """)

        cursor.execute(f"""
            CREATE TABLE IF NOT EXISTS categories (
                id TEXT PRIMARY KEY DEFAULT ({_NEW_ID}),
                name TEXT NOT NULL,
                slug TEXT NOT NULL UNIQUE,
                image_url TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT ({_NOW}),
                updated_at TEXT NOT NULL DEFAULT ({_NOW})
            )
        """)

        cursor.execute(f"""
            CREATE TABLE IF NOT EXISTS collections (
                id TEXT PRIMARY KEY DEFAULT ({_NEW_ID}),
                name TEXT NOT NULL,
                description TEXT,
                image_url TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT ({_NOW}),
                updated_at TEXT NOT NULL DEFAULT ({_NOW})
            )
        """)

        cursor.execute(f"""
            CREATE TABLE IF NOT EXISTS collection_products (
                collection_id TEXT NOT NULL REFERENCES collections(id) ON DELETE CASCADE,
                product_id TEXT NOT NULL REFERENCES products(id) ON DELETE CASCADE,
                created_at TEXT NOT NULL DEFAULT ({_NOW}),
                PRIMARY KEY (collection_id, product_id)
            )
        """)

        # Bump updated_at on every update that does not set it explicitly
        for table in ("products", "categories", "collections"):
            cursor.execute(f"""
                CREATE TRIGGER IF NOT EXISTS update_{table}_updated_at
                AFTER UPDATE ON {table}
                FOR EACH ROW WHEN NEW.updated_at = OLD.updated_at
                BEGIN
                    UPDATE {table} SET updated_at = {_NOW} WHERE id = NEW.id;
                END
            """)

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_products_category ON products(category)")
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_collection_products_product_id "
            "ON collection_products(product_id)"
        )

        conn.commit()


def _product_to_params(product: Product) -> Dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "category": product.category,
        "image_url": product.image_url,
        "image_urls": json.dumps(product.image_urls),
        "tags": json.dumps(product.tags),
        "sizes": json.dumps(product.sizes),
        "colors": json.dumps([c.to_dict() for c in product.colors]),
        "in_stock": int(product.in_stock),
        "is_new": int(product.is_new),
        "is_limited": int(product.is_limited),
    }


def _row_to_product(row: sqlite3.Row) -> Product:
    return Product(
        id=row["id"],
        name=row["name"],
        price=float(row["price"]),
        description=row["description"] or "",
        image_url=row["image_url"],
        image_urls=json.loads(row["image_urls"]),
        category=row["category"],
        tags=json.loads(row["tags"]),
        sizes=json.loads(row["sizes"]),
        colors=[Color(**c) for c in json.loads(row["colors"])],
        in_stock=bool(row["in_stock"]),
        is_new=bool(row["is_new"]),
        is_limited=bool(row["is_limited"]),
    )


def _id_for_rowid(conn: sqlite3.Connection, table: str, rowid: int) -> str:
    """Look up the generated text id of a freshly inserted row."""
    return conn.execute(f"SELECT id FROM {table} WHERE rowid = ?", (rowid,)).fetchone()["id"]


def upsert_product(db_path: str, product: Product, principal: Principal) -> str:
    """Insert or update a product by id. Returns the product id."""
    params = _product_to_params(product)
    with get_connection(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT 1 FROM products WHERE id = ?", (product.id,))
        exists = cursor.fetchone() is not None

        if exists:
            check_access(principal, "products", UPDATE)
            assignments = ", ".join(f"{col} = :{col}" for col in params if col != "id")
            cursor.execute(f"UPDATE products SET {assignments} WHERE id = :id", params)
        else:
            check_access(principal, "products", INSERT)
            columns = ", ".join(params)
            placeholders = ", ".join(f":{col}" for col in params)
            cursor.execute(f"INSERT INTO products ({columns}) VALUES ({placeholders})", params)

        conn.commit()
    return product.id


def delete_product(db_path: str, product_id: str, principal: Principal) -> bool:
    """Delete a product (and its collection memberships). Returns True if a row went away."""
    check_access(principal, "products", DELETE)
    with get_connection(db_path) as conn:
        cursor = conn.execute("DELETE FROM products WHERE id = ?", (product_id,))
        conn.commit()
        return cursor.rowcount > 0


def get_product(db_path: str, product_id: str) -> Optional[Product]:
    with get_connection(db_path) as conn:
        row = conn.execute("SELECT * FROM products WHERE id = ?", (product_id,)).fetchone()
    return _row_to_product(row) if row else None


def get_all_products(db_path: str = DB_PATH, category: Optional[str] = None) -> List[Product]:
    """Get all stored products in insertion order, optionally for one category."""
    query = "SELECT * FROM products"
    params: List[Any] = []
    if category:
        query += " WHERE category = ?"
        params.append(category)
    query += " ORDER BY rowid"

    with get_connection(db_path) as conn:
        rows = conn.execute(query, params).fetchall()
    return [_row_to_product(r) for r in rows]


def get_product_count(db_path: str = DB_PATH) -> int:
    with get_connection(db_path) as conn:
        return conn.execute("SELECT COUNT(*) FROM products").fetchone()[0]


def upsert_category(
    db_path: str,
    name: str,
    slug: str,
    image_url: str,
    principal: Principal,
) -> str:
    """Insert a category, or update the one with the same slug. Returns its id."""
    with get_connection(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT id FROM categories WHERE slug = ?", (slug,))
        row = cursor.fetchone()

        if row:
            check_access(principal, "categories", UPDATE)
            cursor.execute(
                "UPDATE categories SET name = ?, image_url = ? WHERE id = ?",
                (name, image_url, row["id"]),
            )
            category_id = row["id"]
        else:
            check_access(principal, "categories", INSERT)
            cursor.execute(
                "INSERT INTO categories (name, slug, image_url) VALUES (?, ?, ?)",
                (name, slug, image_url),
            )
            category_id = _id_for_rowid(conn, "categories", cursor.lastrowid)

        conn.commit()
    return category_id


def get_categories(db_path: str = DB_PATH) -> List[Dict[str, Any]]:
    with get_connection(db_path) as conn:
        rows = conn.execute("SELECT * FROM categories ORDER BY name").fetchall()
    return [dict(r) for r in rows]


def create_collection(
    db_path: str,
    name: str,
    image_url: str,
    principal: Principal,
    description: Optional[str] = None,
) -> str:
    """Create a collection and return its generated id."""
    check_access(principal, "collections", INSERT)
    with get_connection(db_path) as conn:
        cursor = conn.execute(
            "INSERT INTO collections (name, description, image_url) VALUES (?, ?, ?)",
            (name, description, image_url),
        )
        collection_id = _id_for_rowid(conn, "collections", cursor.lastrowid)
        conn.commit()
    return collection_id


def add_product_to_collection(
    db_path: str, collection_id: str, product_id: str, principal: Principal
) -> None:
    check_access(principal, "collection_products", INSERT)
    with get_connection(db_path) as conn:
        conn.execute(
            "INSERT OR IGNORE INTO collection_products (collection_id, product_id) VALUES (?, ?)",
            (collection_id, product_id),
        )
        conn.commit()


def remove_product_from_collection(
    db_path: str, collection_id: str, product_id: str, principal: Principal
) -> bool:
    check_access(principal, "collection_products", DELETE)
    with get_connection(db_path) as conn:
        cursor = conn.execute(
            "DELETE FROM collection_products WHERE collection_id = ? AND product_id = ?",
            (collection_id, product_id),
        )
        conn.commit()
        return cursor.rowcount > 0


def get_collection_products(db_path: str, collection_id: str) -> List[Product]:
    """Products in a collection, in the order they were added."""
    with get_connection(db_path) as conn:
        rows = conn.execute(
            """
            SELECT p.* FROM products p
            JOIN collection_products cp ON cp.product_id = p.id
            WHERE cp.collection_id = ?
            ORDER BY cp.rowid
            """,
            (collection_id,),
        ).fetchall()
    return [_row_to_product(r) for r in rows]
