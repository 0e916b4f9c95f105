"""Grant the admin flag to an existing user.

Admins manage the conversation category catalog. There is no API for
promoting users, so run this once per admin after they have registered.

Usage:
    cd backend
    uv run python scripts/make_admin.py someone@example.com
"""

import sys

from sqlmodel import Session, select

from app.core.database import engine, init_db
from app.models.user import User

if len(sys.argv) != 2:
    print("Usage: python scripts/make_admin.py <email>")
    raise SystemExit(1)

email = sys.argv[1].strip().lower()
init_db()

with Session(engine) as db:
    user = db.exec(select(User).where(User.email == email)).first()
    if not user:
        print(f"No user registered with email {email}.")
        raise SystemExit(1)

    user.is_admin = True
    db.add(user)
    db.commit()

print(f"{email} is now an admin.")
