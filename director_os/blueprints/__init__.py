"""
Director OS
Blueprint registry and shared error mapping.
"""

import logging

from director_os.core.exceptions import NotFoundError, ValidationError
from director_os.utils.errors import E, api_error

logger = logging.getLogger(__name__)


def register_domain_error_handlers(bp):
    """Map service-layer exceptions to JSON 404 / 400 on ``bp``."""

    @bp.errorhandler(NotFoundError)
    def _handle_not_found(error: NotFoundError):
        return api_error(E.NOT_FOUND, str(error))

    @bp.errorhandler(ValidationError)
    def _handle_validation(error: ValidationError):
        logger.info("Validation failed: %s", error)
        return api_error(E.VALIDATION_INVALID, str(error), details=error.details or None)

    return bp
