"""
Core — Exception Handling

Custom exceptions and DRF exception handler for consistent API
error envelopes.

@file core/exceptions.py
"""

import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class BusinessRuleViolation(APIException):
    """Raised when a business rule is violated at the service layer."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Business rule violation.'
    default_code = 'BUSINESS_RULE_VIOLATION'


class ResourceNotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found.'
    default_code = 'RESOURCE_NOT_FOUND'


class DataIntegrityError(APIException):
    """
    Raised when a hierarchy snapshot cannot be indexed: duplicate area
    codes, or type inconsistencies when running in strict mode.

    ``codes`` lists every offending area code so upstream data bugs can
    be located.
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Hierarchy data integrity violation.'
    default_code = 'DATA_INTEGRITY_ERROR'

    def __init__(self, detail=None, codes=(), code=None):
        self.codes = tuple(codes)
        if detail is None and self.codes:
            detail = f'{self.default_detail} Offending codes: {", ".join(self.codes)}.'
        super().__init__(detail=detail, code=code)


class CycleDetected(APIException):
    """Raised when an ancestor walk exceeds the number of known nodes."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Cycle detected in area hierarchy.'
    default_code = 'CYCLE_DETECTED'

    def __init__(self, start_code='', detail=None, code=None):
        self.start_code = start_code
        if detail is None and start_code:
            detail = f'Cycle detected while walking ancestors of {start_code!r}.'
        super().__init__(detail=detail, code=code)


class AreaNotFoundError(ResourceNotFoundError):
    default_detail = 'Area not found.'
    default_code = 'AREA_NOT_FOUND'


# ---------------------------------------------------------------------------
# Standard exception handler
# ---------------------------------------------------------------------------

def standard_exception_handler(exc, context):
    """
    Wraps every error response in the standard envelope:
      { "success": false, "errors": {...}, "code": "ERROR_CODE" }
    """
    if isinstance(exc, Http404):
        exc = ResourceNotFoundError()
    elif isinstance(exc, PermissionDenied):
        exc = APIException(detail='Permission denied.', code='PERMISSION_DENIED')
        exc.status_code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, ValidationError):
        data = {
            'success': False,
            'errors': exc.message_dict if hasattr(exc, 'message_dict') else {'detail': exc.messages},
            'code': 'VALIDATION_ERROR',
        }
        return Response(data, status=status.HTTP_400_BAD_REQUEST)

    response = exception_handler(exc, context)

    if response is not None:
        errors = {}
        code = getattr(exc, 'default_code', 'ERROR')

        if isinstance(response.data, dict):
            errors = response.data
            code = response.data.pop('code', code) if 'code' in response.data else code
        elif isinstance(response.data, list):
            errors = {'detail': response.data}
        else:
            errors = {'detail': [str(response.data)]}

        if isinstance(exc, DataIntegrityError) and exc.codes:
            errors['codes'] = list(exc.codes)

        response.data = {
            'success': False,
            'errors': errors,
            'code': code,
        }

    if response is None:
        logger.exception('Unhandled exception in view: %s', exc)
        return Response(
            {'success': False, 'errors': {'detail': ['Internal server error.']}, 'code': 'INTERNAL_ERROR'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return response
