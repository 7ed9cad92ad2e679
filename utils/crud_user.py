from sqlalchemy.orm import Session
from sqlalchemy import select
from models.models_user import User

def get_user_by_id(db: Session, user_id: str) -> User | None:
    return db.execute(select(User).where(User.id == user_id)).scalar_one_or_none()
