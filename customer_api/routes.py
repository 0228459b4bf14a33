# routes.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from customer_api.database import engine
from customer_api.exceptions import (
    CustomerError,
    InvalidAge,
    InvalidId,
    InvalidName,
    NameAlreadyExists,
    NotFound,
)
from customer_api.models import Customer, NameCheck
from customer_api.repository import BaseCustomerRepository, SQLModelCustomerRepository
from customer_api.service import CustomerService

log = logging.getLogger(__name__)

router = APIRouter()

# Dependency injection: repository -> service
def get_customer_repo() -> BaseCustomerRepository:
    return SQLModelCustomerRepository(engine)

def get_customer_service(repo: BaseCustomerRepository = Depends(get_customer_repo)) -> CustomerService:
    return CustomerService(repo)

# Exception class -> HTTP status; anything else is a server error
STATUS_FOR_ERROR = {
    InvalidAge: status.HTTP_400_BAD_REQUEST,
    InvalidId: status.HTTP_400_BAD_REQUEST,
    InvalidName: status.HTTP_400_BAD_REQUEST,
    NameAlreadyExists: status.HTTP_409_CONFLICT,
    NotFound: status.HTTP_404_NOT_FOUND,
}

def to_http_error(error: CustomerError) -> HTTPException:
    status_code = STATUS_FOR_ERROR.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        log.error(f"Customer request failed: {error.message}")
    return HTTPException(status_code=status_code, detail=error.message)

# ==============================================================================
# --- CUSTOMER ENDPOINTS ---
# ==============================================================================

@router.post("/customers/", response_model=Customer, status_code=status.HTTP_201_CREATED)
def create_customer(customer: Customer, service: CustomerService = Depends(get_customer_service)):
    try:
        return service.create_customer(customer)
    except CustomerError as e:
        raise to_http_error(e)

@router.get("/customers/", response_model=List[Customer])
def list_customers(service: CustomerService = Depends(get_customer_service)):
    try:
        return service.get_all_customers()
    except CustomerError as e:
        raise to_http_error(e)

@router.post("/customers/validate-name")
def validate_name(body: NameCheck, service: CustomerService = Depends(get_customer_service)):
    try:
        service.validate_name(body.name)
    except CustomerError as e:
        raise to_http_error(e)
    return {"message": "Name is valid"}

@router.get("/customers/{customer_id}", response_model=Customer)
def get_customer(customer_id: int, service: CustomerService = Depends(get_customer_service)):
    try:
        return service.get_customer_by_id(customer_id)
    except CustomerError as e:
        raise to_http_error(e)

@router.get("/customers/{customer_id}/exists")
def customer_exists(customer_id: int, service: CustomerService = Depends(get_customer_service)):
    try:
        service.search_customer_by_id(customer_id)
    except CustomerError as e:
        raise to_http_error(e)
    return {"message": "Customer exists"}

@router.put("/customers/{customer_id}", response_model=Customer)
def update_customer(customer_id: int, customer: Customer, service: CustomerService = Depends(get_customer_service)):
    try:
        return service.update_customer(customer_id, customer)
    except CustomerError as e:
        raise to_http_error(e)

@router.delete("/customers/{customer_id}")
def delete_customer(customer_id: int, service: CustomerService = Depends(get_customer_service)):
    try:
        service.delete_customer(customer_id)
    except CustomerError as e:
        raise to_http_error(e)
    return {"message": "Customer deleted successfully"}
