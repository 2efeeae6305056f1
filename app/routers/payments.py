from fastapi import APIRouter, Depends, Query, Body, status
from sqlalchemy.orm import Session
from typing import Dict, Any, Optional
from ..database import get_db
from ..models.user import User
from ..models.enums import RegistrationStatus
from ..services.payment_service import PaymentService
from ..schemas.common import PaginationParams
from ..schemas.payment import PaymentRequest, RefundRequest
from ..schemas.registration import RegistrationResponse
from ..utils.payment_gateway import PaymentGateway, get_payment_gateway
from ..utils.router_helpers import handle_service_errors, RouterResponse
from ..dependencies.pagination import pagination_params
from ..dependencies.permissions import get_current_user

router = APIRouter(tags=["payments"])


@router.post("/process", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def process_payment(
    payment_data: PaymentRequest,
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    current_user: User = Depends(get_current_user),
):
    """Charge the payment method and register the caller"""
    registration = PaymentService(db, gateway).process_payment(
        current_user, payment_data
    )

    return RouterResponse.created(
        data={"registration": RegistrationResponse.model_validate(registration)},
        message="Payment processed successfully",
    )


@router.get("/history", response_model=Dict[str, Any])
@handle_service_errors
async def get_payment_history(
    status_filter: Optional[RegistrationStatus] = Query(None, alias="status"),
    pagination: PaginationParams = Depends(pagination_params),
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    current_user: User = Depends(get_current_user),
):
    page = PaymentService(db, gateway).get_payment_history(
        current_user, pagination, status_filter.value if status_filter else None
    )

    return RouterResponse.success(
        data={
            "payments": [RegistrationResponse.model_validate(r) for r in page.items],
            "pagination": page.pagination,
        },
        message="Payment history retrieved successfully",
    )


@router.post("/refund/{registration_id}", response_model=Dict[str, Any])
@handle_service_errors
async def process_refund(
    registration_id: int,
    refund_data: Optional[RefundRequest] = Body(None),
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    current_user: User = Depends(get_current_user),
):
    """Refund a confirmed registration"""
    result = PaymentService(db, gateway).process_refund(
        registration_id, current_user, refund_data.reason if refund_data else None
    )

    return RouterResponse.success(
        data={
            "refund": result["refund"],
            "registration": RegistrationResponse.model_validate(result["registration"]),
        },
        message="Refund processed successfully",
    )


@router.get("/{registration_id}", response_model=Dict[str, Any])
@handle_service_errors
async def get_payment_details(
    registration_id: int,
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    current_user: User = Depends(get_current_user),
):
    registration = PaymentService(db, gateway).get_payment_details(
        registration_id, current_user
    )

    return RouterResponse.success(
        data={"payment": RegistrationResponse.model_validate(registration)},
        message="Payment details retrieved successfully",
    )
