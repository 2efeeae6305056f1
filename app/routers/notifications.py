from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Dict, Any, Optional
from ..database import get_db
from ..models.user import User
from ..models.enums import NotificationType
from ..services.notification_service import NotificationService
from ..schemas.common import PaginationParams
from ..schemas.notification import NotificationCreate, NotificationResponse
from ..utils.router_helpers import handle_service_errors, RouterResponse
from ..dependencies.pagination import pagination_params
from ..dependencies.permissions import get_current_user, require_organizer

router = APIRouter(tags=["notifications"])


@router.post("", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def create_notification(
    notification_data: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_organizer),
):
    """Notify selected users, or broadcast to the event's attendees"""
    notifications = NotificationService(db).create_notification(
        notification_data, current_user
    )

    return RouterResponse.created(
        data={
            "notifications": [
                NotificationResponse.model_validate(n) for n in notifications
            ]
        },
        message="Notification sent successfully",
    )


@router.get("", response_model=Dict[str, Any])
@handle_service_errors
async def get_user_notifications(
    is_read: Optional[bool] = Query(None, alias="isRead"),
    notification_type: Optional[NotificationType] = Query(None, alias="type"),
    pagination: PaginationParams = Depends(pagination_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get user's notifications with filtering and pagination"""
    page = NotificationService(db).get_user_notifications(
        current_user,
        pagination,
        is_read=is_read,
        notification_type=notification_type.value if notification_type else None,
    )

    return RouterResponse.success(
        data={
            "notifications": [
                NotificationResponse.model_validate(n) for n in page.items
            ],
            "pagination": page.pagination,
        },
        message="Notifications retrieved successfully",
    )


@router.get("/unread-count", response_model=Dict[str, Any])
@handle_service_errors
async def get_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    count = NotificationService(db).get_unread_count(current_user)

    return RouterResponse.success(
        data={"unreadCount": count}, message="Unread count retrieved successfully"
    )


@router.put("/read-all", response_model=Dict[str, Any])
@handle_service_errors
async def mark_all_as_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    updated = NotificationService(db).mark_all_as_read(current_user)

    return RouterResponse.updated(
        data={"updatedCount": updated},
        message="All notifications marked as read",
    )


@router.get("/{notification_id}", response_model=Dict[str, Any])
@handle_service_errors
async def get_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    notification = NotificationService(db).get_notification(
        notification_id, current_user
    )

    return RouterResponse.success(
        data={"notification": NotificationResponse.model_validate(notification)},
        message="Notification retrieved successfully",
    )


@router.put("/{notification_id}/read", response_model=Dict[str, Any])
@handle_service_errors
async def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    notification = NotificationService(db).mark_as_read(notification_id, current_user)

    return RouterResponse.updated(
        data={"notification": NotificationResponse.model_validate(notification)},
        message="Notification marked as read",
    )


@router.delete("/{notification_id}", response_model=Dict[str, Any])
@handle_service_errors
async def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    NotificationService(db).delete_notification(notification_id, current_user)

    return RouterResponse.deleted(message="Notification deleted successfully")
