"""
Script to recreate the SQLite development database from the models
"""
import os
import sqlite3
from storefront_admin.database import Base, engine, database_url
from storefront_admin.models import *  # noqa: F401,F403

if not database_url.startswith("sqlite:///"):
    print(f"[ERROR] Refusing to recreate a non-SQLite database: {database_url}")
    print("   Use 'alembic upgrade head' instead.")
    exit(1)

# Delete existing database if it exists
db_file = database_url.replace("sqlite:///", "", 1)
if os.path.exists(db_file):
    try:
        os.remove(db_file)
        print(f"Deleted existing {db_file}")
    except OSError as e:
        print(f"Could not delete {db_file}: {e}")
        print("Please stop the server and try again")
        exit(1)

# Create all tables
print("Creating database tables...")
Base.metadata.create_all(bind=engine)
print("Database created successfully!")

# Verify tables were created
conn = sqlite3.connect(db_file)
cursor = conn.cursor()
cursor.execute("SELECT name FROM sqlite_master WHERE type='table'")
tables = [row[0] for row in cursor.fetchall()]
print(f"Created tables: {', '.join(tables)}")
conn.close()
