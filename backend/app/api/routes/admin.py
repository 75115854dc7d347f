"""
Admin dashboard routes.
"""
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.models.user import User
from app.schemas.admin import (
    DashboardStats, AdminUserRow, AdminTripRow, PopularActivity, UserStatusUpdate
)
from app.schemas.user import UserResponse
from app.api.dependencies import get_current_admin
from app.services import admin_service

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return admin_service.get_dashboard_stats(db)


@router.get("/users", response_model=List[AdminUserRow])
async def list_users(
    search: Optional[str] = None,
    status_filter: str = Query("all", alias="status"),
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return admin_service.list_users(db, search=search, status_filter=status_filter)


@router.patch("/users/{user_id}/status", response_model=UserResponse)
async def set_user_status(
    user_id: int,
    status_update: UserStatusUpdate,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Suspend or reactivate a user."""
    return admin_service.set_user_status(user_id, status_update.is_active, current_admin, db)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    admin_service.delete_user(user_id, current_admin, db)
    return None


@router.get("/trips", response_model=List[AdminTripRow])
async def list_trips(
    search: Optional[str] = None,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return admin_service.list_trips(db, search=search)


@router.get("/activities/popular", response_model=List[PopularActivity])
async def popular_activities(
    limit: int = Query(10, ge=1, le=100),
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return admin_service.get_popular_activities(db, limit=limit)


@router.get("/reports/{report_type}")
async def export_report(
    report_type: str,
    file_format: str = Query("csv", alias="format"),
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Download a users, trips or activities report as CSV or JSON."""
    content, media_type, filename = admin_service.export_report(report_type, file_format, db)
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
