# backend/routes/logs.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional, Any
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from database import get_db
from models.log import Log
from models.users import User
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/logs", tags=["Logs"])

# --- SCHEMAS ---
class LogResponse(BaseModel):
    id: int
    ts: datetime
    user_id: Optional[int] = None
    action: str
    resource: str
    resource_id: Optional[int] = None
    status: str
    ip: Optional[str] = None
    meta: Optional[Any] = None

    model_config = ConfigDict(from_attributes=True)

# --- ENDPOINT ---
@router.get("", response_model=List[LogResponse])
def get_logs(
    action: Optional[str] = Query(None, description="Filtrar por ação (ex.: LOGIN)"),
    resource: Optional[str] = Query(None, description="Filtrar por recurso"),
    user_id: Optional[int] = Query(None, description="Filtrar por ID do usuário"),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    query = db.query(Log)

    if action:
        query = query.filter(Log.action.ilike(f"%{action}%"))
    if resource:
        query = query.filter(Log.resource == resource)
    if user_id is not None:
        query = query.filter(Log.user_id == user_id)

    # Newest first
    return query.order_by(Log.ts.desc(), Log.id.desc()).limit(limit).all()
