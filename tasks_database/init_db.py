"""
Database initialization script.

Run this script to create all required tables in the database.
"""
import sys

from .db import Database


# PUBLIC_INTERFACE
def init_db(url=None):
    """Initializes the database by creating all tables if they do not exist."""
    database = Database(url)
    try:
        database.create_all()
    finally:
        database.dispose()
    return database.url


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    url = init_db(argv[0] if argv else None)
    print(f"Database tables created successfully on {url.render_as_string(hide_password=True)}.")


if __name__ == "__main__":
    main()
