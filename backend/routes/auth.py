# backend/routes/auth.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from schemas import user as schemas
from utils.audit import client_ip, write_log
from utils.errors import AuthError, ConflictError, ValidationError
from utils.hashing import get_password_hash, verify_password
from utils.tokenJWT import create_access_token, get_current_user

router = APIRouter(tags=["Auth"])


def _normalize_email(email: str) -> str:
    return email.strip().lower()


# Register a new member of the market staff
@router.post("/usuarios", response_model=schemas.UserResponse)
def register(user: schemas.UserCreate, request: Request, db: Session = Depends(get_db)):
    name = (user.name or "").strip()
    if not name or not user.email or not user.password:
        raise ValidationError("Campos obrigatórios: name, email, password")

    normalized_email = _normalize_email(user.email)

    # Check for existing user
    exists = db.query(User).filter(func.lower(User.email) == normalized_email).first()
    if exists:
        write_log(db, user_id=None, action="REGISTER", resource="auth", status="FAIL",
                  ip=client_ip(request), meta={"email": normalized_email, "reason": "Email exists"})
        raise ConflictError("E-mail já cadastrado")

    new_user = User(name=name, email=normalized_email, password_hash=get_password_hash(user.password))
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent registration won the unique index
        db.rollback()
        raise ConflictError("E-mail já cadastrado")
    db.refresh(new_user)

    write_log(db, user_id=new_user.id, action="REGISTER", resource="auth",
              resource_id=new_user.id, ip=client_ip(request), meta={"email": new_user.email})
    return new_user


# Check credentials and open a session (bearer token)
@router.post("/auth/login", response_model=schemas.LoginResponse)
def login(payload: schemas.UserLogin, request: Request, db: Session = Depends(get_db)):
    if not payload.email or not payload.password:
        raise ValidationError("Informe email e senha")

    db_user = db.query(User).filter(User.email == _normalize_email(payload.email)).first()

    if not db_user or not verify_password(payload.password, db_user.password_hash):
        write_log(db, user_id=(db_user.id if db_user else None), action="LOGIN", resource="auth",
                  status="FAIL", ip=client_ip(request), meta={"email": payload.email})
        raise AuthError("Credenciais inválidas")

    access_token = create_access_token(db_user)

    write_log(db, user_id=db_user.id, action="LOGIN", resource="auth",
              resource_id=db_user.id, ip=client_ip(request), meta={"email": db_user.email})

    return {
        "id": db_user.id,
        "name": db_user.name,
        "email": db_user.email,
        "access_token": access_token,
        "token_type": "bearer",
    }


# Retrieve current authenticated user details
@router.get("/auth/me", response_model=schemas.UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
