"""
API exceptions for the e-commerce module and the mapping from service errors
"""

import functools
import logging

from rest_framework import status
from rest_framework.exceptions import APIException

from .services.base import (
    ServiceError, ValidationError, NotFoundError, ExpiredError, StorageError, ConflictError,
)

logger = logging.getLogger(__name__)


class EcommerceBaseException(APIException):
    """Base exception for e-commerce module"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'An error occurred in the e-commerce system'
    default_code = 'ecommerce_error'


class EcommerceValidationException(EcommerceBaseException):
    """Exception raised when request data fails business validation"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Validation failed'
    default_code = 'validation_error'


class ResourceNotFoundException(EcommerceBaseException):
    """Exception raised when a requested resource does not exist"""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found'
    default_code = 'not_found'


class InvalidCouponException(ResourceNotFoundException):
    """Exception raised when coupon is unknown or inactive"""
    default_detail = 'Invalid coupon code'
    default_code = 'invalid_coupon'


class CouponExpiredException(EcommerceBaseException):
    """Exception raised when coupon is past its expiry date"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Coupon has expired'
    default_code = 'coupon_expired'


class StorageUnavailableException(EcommerceBaseException):
    """Exception raised when the database could not complete a request"""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'The store is temporarily unable to save your request, please try again'
    default_code = 'storage_unavailable'


class ConcurrentUpdateException(EcommerceBaseException):
    """Exception raised when a concurrent change could not be applied"""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'The list was changed by someone else, please retry'
    default_code = 'conflict'


def to_api_exception(error: ServiceError, coupon: bool = False) -> APIException:
    """Map a service layer error to the API exception returned to clients"""
    if isinstance(error, ValidationError):
        detail = error.field_errors or {'non_field_errors': [error.message]}
        return EcommerceValidationException(detail=detail)
    if isinstance(error, ExpiredError):
        return CouponExpiredException(detail=error.message)
    if isinstance(error, NotFoundError):
        if coupon:
            return InvalidCouponException(detail=error.message)
        return ResourceNotFoundException(detail=error.message)
    if isinstance(error, ConflictError):
        return ConcurrentUpdateException()
    if isinstance(error, StorageError):
        return StorageUnavailableException()
    return EcommerceBaseException(detail=error.message)


def handle_service_errors(func=None, *, coupon: bool = False):
    """Decorator converting service errors raised by a view into API exceptions"""
    def decorator(view_func):
        @functools.wraps(view_func)
        def wrapper(*args, **kwargs):
            try:
                return view_func(*args, **kwargs)
            except ServiceError as e:
                if isinstance(e, (StorageError, ConflictError)):
                    logger.error(
                        f"{view_func.__name__} failed: {e.message}",
                        extra={'context': e.details},
                        exc_info=e.original_error is not None
                    )
                raise to_api_exception(e, coupon=coupon)
        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
