"""API-level exceptions shared by the modules' views.

Rendered by ``drf_standardized_errors`` into the common
``{"type": ..., "errors": [{"code", "detail", "attr"}]}`` envelope.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.exceptions import APIException


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists."
    default_code = "conflict"


class BusinessRuleViolation(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Business rule violation."
    default_code = "business_rule_violation"
