# Database connection helpers

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import mysql.connector
from mysql.connector import pooling
from flask import g, current_app

logger = logging.getLogger(__name__)

_pool_lock = threading.Lock()

# Case- and accent-sensitive comparison of stored text
EXACT_COLLATION = "utf8mb4_bin"


def get_db():
    """Get database connection for current request"""
    if 'db' not in g:
        g.db = mysql.connector.connect(**current_app.config['DB_CONFIG'])
    return g.db

def get_cursor(dictionary=True):
    """Get cursor from connection"""
    db = get_db()
    return db.cursor(dictionary=dictionary)

def execute_query(query, params=None, fetch_one=False):
    """Helper to execute query and return results"""
    cursor = get_cursor()
    cursor.execute(query, params or ())

    if fetch_one:
        result = cursor.fetchone()
    else:
        result = cursor.fetchall()

    cursor.close()
    return result

def execute_write(query, params=None):
    """Execute a single INSERT/UPDATE and commit it. Returns the new row id."""
    db = get_db()
    cursor = db.cursor()
    try:
        cursor.execute(query, params or ())
        db.commit()
        return cursor.lastrowid
    finally:
        cursor.close()


# ============================================================
# PARALLEL READS
# ============================================================

def get_pool():
    """
    Connection pool shared by parallel readers.
    Created lazily per app; the semaphore makes workers wait for a free
    connection instead of failing when concurrent requests drain the pool.
    """
    app = current_app._get_current_object()
    with _pool_lock:
        if 'mysql_pool' not in app.extensions:
            size = app.config['DB_POOL_SIZE']
            app.extensions['mysql_pool'] = (
                pooling.MySQLConnectionPool(
                    pool_name=f"quiz_show_{id(app)}",
                    pool_size=size,
                    **app.config['DB_CONFIG']
                ),
                threading.BoundedSemaphore(size),
            )
    return app.extensions['mysql_pool']


def _pooled_query(pool, slots, query, params):
    with slots:
        conn = pool.get_connection()
        try:
            cursor = conn.cursor(dictionary=True)
            cursor.execute(query, params or ())
            result = cursor.fetchall()
            cursor.close()
            return result
        finally:
            # Returns the connection to the pool
            conn.close()


def run_parallel(queries):
    """
    Run independent read queries concurrently.
    queries: [(sql, params), ...]
    Returns the result rows in the same order. Waits for every query;
    an error from any of them re-raises here, failing the whole request.
    """
    if not queries:
        return []

    pool, slots = get_pool()
    max_workers = min(len(queries), current_app.config['STATS_MAX_WORKERS'])

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="stats-query") as executor:
        futures = [
            executor.submit(_pooled_query, pool, slots, query, params)
            for query, params in queries
        ]
        return [future.result() for future in futures]


def to_number(value):
    """DECIMAL columns and SUM() come back as Decimal; return int/float for JSON"""
    if value is None:
        return 0
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def close_db(e=None):
    """Close database connection"""
    db = g.pop('db', None)
    if db is not None:
        db.close()

def init_db(app):
    """Initialize database with app"""
    app.teardown_appcontext(close_db)
