# pcstore/data/seed.py
from pcstore.data.database import SessionLocal
from pcstore.data.models import UserModel
from pcstore.domain.enums import Role
from pcstore.utils.security import hash_password
from pcstore.utils.settings import ADMIN_USERNAME, ADMIN_PASSWORD, ADMIN_EMAIL
from pcstore.utils.logging import get_logger

logger = get_logger(__name__)


def seed():
    db = SessionLocal()
    try:
        # not forcing: only seed if the admin is missing
        if db.query(UserModel).filter(UserModel.username == ADMIN_USERNAME).first():
            return
        admin = UserModel(
            username=ADMIN_USERNAME,
            password_hash=hash_password(ADMIN_PASSWORD),
            first_name="Admin",
            last_name="Admin",
            email=ADMIN_EMAIL,
            role=Role.ADMIN.value,
        )
        db.add(admin)
        db.commit()
        logger.info(f"Seeded admin account '{ADMIN_USERNAME}'")
    finally:
        db.close()
