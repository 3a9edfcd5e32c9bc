"""
Base service classes for e-commerce functionality
"""

import logging
from typing import Dict, List, Optional


class ServiceError(Exception):
    """Base exception for service layer errors"""

    def __init__(self, message: str, details: Optional[Dict] = None, original_error: Optional[Exception] = None):
        self.message = message
        self.details = details or {}
        self.original_error = original_error
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Caller-correctable input problem, raised before anything is written"""

    @classmethod
    def for_field(cls, field: str, message: str) -> 'ValidationError':
        return cls(message, details={'field': field, 'errors': {field: [message]}})

    @property
    def field_errors(self) -> Dict[str, List[str]]:
        return self.details.get('errors') or {}


class NotFoundError(ServiceError):
    """Exception for when requested resource is not found"""
    pass


class ExpiredError(ServiceError):
    """Exception for resources past their expiry, such as coupons"""
    pass


class StorageError(ServiceError):
    """Exception for failures writing to or reading from the database"""
    pass


class ConflictError(ServiceError):
    """Exception for concurrent modifications that could not be applied"""
    pass


class BaseEcommerceService:
    """Base service class for all e-commerce services"""

    def __init__(self):
        self.logger = logging.getLogger(f"apps.ecommerce.services.{self.__class__.__name__}")

    def log_info(self, message: str, context: Optional[Dict] = None):
        """Log informational message with context"""
        self.logger.info(message, extra={'context': context or {}})

    def log_warning(self, message: str, context: Optional[Dict] = None):
        """Log warning message with context"""
        self.logger.warning(message, extra={'context': context or {}})

    def log_error(self, message: str, error: Optional[Exception] = None, context: Optional[Dict] = None):
        """Log error message with context"""
        self.logger.error(
            message,
            extra={
                'context': context or {},
                'error': str(error) if error else None
            },
            exc_info=bool(error)
        )

