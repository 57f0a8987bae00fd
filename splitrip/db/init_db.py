"""
Database initialization script.
"""
from splitrip.core.config import Settings
from splitrip.db.session import build_engine, init_db

if __name__ == "__main__":
    settings = Settings()
    print(f"Initializing database at {settings.DATABASE_URL}...")
    init_db(build_engine(settings))
    print("Database initialized successfully!")
