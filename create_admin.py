"""
Script to create the first admin user
Run this script after running database migrations

Usage:
    python create_admin.py

Environment Variables (optional):
    ADMIN_EMAIL - Admin email address
    ADMIN_PASSWORD - Admin password (min 6 characters)
    ADMIN_NAME - Admin name
"""
import sys
import os
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from storefront_admin.database import SessionLocal
from storefront_admin.models.user import User
from storefront_admin.utils.security import get_password_hash
from storefront_admin.config import settings


def create_admin():
    """Create the first admin user, or grant the flag to an existing account"""
    db = SessionLocal()

    try:
        try:
            existing_admin = db.query(User).filter(User.is_admin == True).first()
        except OperationalError as e:
            if "no such table" in str(e).lower():
                print("[ERROR] Users table does not exist!")
                print("   Please run database migrations first:")
                print("   alembic upgrade head")
                return
            raise

        if existing_admin:
            print("[ERROR] Admin user already exists!")
            print(f"   Email: {existing_admin.email}")
            print("   Use the login endpoint to authenticate.")
            return

        print("=" * 50)
        print("Create First Admin User")
        print("=" * 50)

        # Environment variables first, then settings, then prompt
        email = os.getenv("ADMIN_EMAIL", "").strip() or settings.ADMIN_EMAIL
        password = os.getenv("ADMIN_PASSWORD", "").strip() or settings.ADMIN_PASSWORD
        name = os.getenv("ADMIN_NAME", "").strip() or settings.ADMIN_NAME

        if not email:
            email = input("Enter admin email: ").strip()
            if not email:
                print("[ERROR] Email is required!")
                return

        existing = db.query(User).filter(User.email == email).first()
        if existing:
            existing.is_admin = True
            db.commit()
            print(f"[SUCCESS] Granted admin permission to existing user {email}")
            return

        if not password:
            password = input("Enter admin password (min 6 characters): ").strip()
        if len(password) < 6:
            print("[ERROR] Password must be at least 6 characters!")
            return

        if not name:
            name = input("Enter admin name: ").strip()
            if not name:
                print("[ERROR] Name is required!")
                return

        admin = User(
            email=email,
            password_hash=get_password_hash(password),
            name=name,
            is_admin=True,
            is_active=True
        )

        db.add(admin)
        db.commit()
        db.refresh(admin)

        print("\n" + "=" * 50)
        print("[SUCCESS] Admin user created successfully!")
        print("=" * 50)
        print(f"   Email: {admin.email}")
        print(f"   Name: {admin.name}")
        print(f"   ID: {admin.id}")
        print("\n[TIP] You can now login at: POST /api/auth/login")
        print("=" * 50)

    except SQLAlchemyError as e:
        db.rollback()
        print(f"[ERROR] Error creating admin: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    create_admin()
