"""
Database Initialization Script
Creates tables and optionally fills them with sample data
"""

from gym_portal.extensions import db
from gym_portal.db_init.sample_data import (
    SAMPLE_PASSWORD,
    create_sample_users,
    create_sample_records,
    create_sample_articles
)


def clear_database():
    """Drop all tables and recreate them"""
    print("🗑️  Dropping all tables...")
    db.drop_all()
    print("✅ Tables dropped successfully")

    print("📋 Creating tables...")
    db.create_all()
    print("✅ Tables created successfully")


def init_database(with_sample_data=True):
    """
    Initialize the database with tables and optionally sample data

    Args:
        with_sample_data (bool): Whether to populate with sample data
    """
    print("🚀 Initializing database...")

    print("📋 Creating tables...")
    db.create_all()
    print("✅ Tables created successfully")

    if with_sample_data:
        print("\n📦 Creating sample data...")
        users = create_sample_users()
        create_sample_records(users)
        create_sample_articles()

        print("\n🔑 Sample accounts (password: %s):" % SAMPLE_PASSWORD)
        for role, user in users.items():
            print(f"   {role.value:<12} {user.email}")
    else:
        print("✅ Database tables created (no sample data)")

    return True


def reset_database():
    """Complete database reset - drop, create, and populate"""
    print("⚠️  RESETTING DATABASE - This will delete all data!")
    clear_database()
    init_database(with_sample_data=True)
    print("\n✅ Database reset complete!")
