"""
Script to create a sample user and print a session token for local testing.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from app.db.database import SessionLocal, Base, engine
from app.models import User
from app.services.auth import create_access_token

SAMPLE_EMAIL = "broker@example.com"


def create_sample_user():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == SAMPLE_EMAIL).first()
        if user:
            print(f"User '{SAMPLE_EMAIL}' already exists with ID: {user.id}")
        else:
            user = User(email=SAMPLE_EMAIL, name="Sample Broker")
            db.add(user)
            db.commit()
            db.refresh(user)
            print(f"Created user: {user.email} (ID: {user.id})")
        print(f"Bearer token: {create_access_token(user.id)}")
    except Exception as e:
        print(f"Error: {e}")
        db.rollback()
    finally:
        db.close()

if __name__ == "__main__":
    create_sample_user()
