import logging
import uuid, bcrypt
from sqlalchemy.orm import Session
from papernotes.auth.models import User

logger = logging.getLogger(__name__)

def _hash(pw: str) -> str:
    return bcrypt.hashpw(pw.encode(), bcrypt.gensalt()).decode()

def _verify(pw: str, ph: str) -> bool:
    try: return bcrypt.checkpw(pw.encode(), ph.encode())
    except ValueError: return False

def _public(u: User) -> dict:
    return {"id": u.id, "email": u.email, "created_at": u.created_at}

def register_user(db: Session, email: str, password: str) -> dict:
    email = email.lower().strip()
    if db.query(User).filter(User.email == email).first():
        raise ValueError("email_already_registered")
    u = User(id=str(uuid.uuid4()), email=email, password_hash=_hash(password))
    db.add(u); db.commit(); db.refresh(u)
    logger.info("registered user %s", u.id)
    return _public(u)

def authenticate_user(db: Session, email: str, password: str) -> dict | None:
    u = db.query(User).filter(User.email == email.lower().strip()).first()
    if not u or not _verify(password, u.password_hash):
        return None
    return {"sub": u.id, "email": u.email}

def change_password(db: Session, user_id: str, new_password: str) -> dict:
    u = db.get(User, user_id)
    if not u:
        raise LookupError("user_not_found")
    u.password_hash = _hash(new_password)
    db.commit(); db.refresh(u)
    logger.info("password changed for user %s", u.id)
    return _public(u)
