import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.init import get_db
from database.models.user_model import User
from schemas.dashboard_schema import (
    AdminDashboard,
    BusinessDashboard,
    CustomerDashboard,
    OwnerDashboard,
    PartnerDashboard,
)
from services.dashboard_service import DashboardService
from services.exceptions import ServiceError
from utils.permissions import require_permission

from responses.success import data_response
from responses.error import internal_server_error, service_error

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
    responses={404: {"description": "Not found"}},
)


@router.get("/customer")
def get_customer_dashboard(
    user_id: Optional[int] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("dashboard", "customer")),
):
    """
    Bookings and spend of a customer.

    Defaults to the caller when userId is not given.
    """
    try:
        data = DashboardService(db).get_customer_dashboard(user_id or current_user.id)
        return data_response(CustomerDashboard.model_validate(data, from_attributes=True))
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        logger.exception("Failed to build customer dashboard")
        return internal_server_error(f"Failed to get customer dashboard: {str(e)}")


@router.get("/admin")
def get_admin_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("dashboard", "admin")),
):
    try:
        data = DashboardService(db).get_admin_dashboard()
        return data_response(AdminDashboard(**data))
    except Exception as e:
        logger.exception("Failed to build admin dashboard")
        return internal_server_error(f"Failed to get admin dashboard: {str(e)}")


@router.get("/owner")
def get_owner_dashboard(
    user_id: Optional[int] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("dashboard", "owner")),
):
    try:
        data = DashboardService(db).get_owner_dashboard(user_id or current_user.id)
        return data_response(OwnerDashboard(**data))
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        logger.exception("Failed to build owner dashboard")
        return internal_server_error(f"Failed to get owner dashboard: {str(e)}")


@router.get("/business")
def get_business_dashboard(
    user_id: Optional[int] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("dashboard", "business")),
):
    try:
        data = DashboardService(db).get_business_dashboard(user_id or current_user.id)
        return data_response(BusinessDashboard(**data))
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        logger.exception("Failed to build business dashboard")
        return internal_server_error(f"Failed to get business dashboard: {str(e)}")


@router.get("/partner")
def get_partner_dashboard(
    user_id: Optional[int] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("dashboard", "partner")),
):
    try:
        data = DashboardService(db).get_partner_dashboard(user_id or current_user.id)
        return data_response(PartnerDashboard(**data))
    except Exception as e:
        logger.exception("Failed to build partner dashboard")
        return internal_server_error(f"Failed to get partner dashboard: {str(e)}")
