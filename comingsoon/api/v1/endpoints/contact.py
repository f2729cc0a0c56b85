"""
Contact form endpoint for the landing page.

Validates the submission, checks the relay configuration and forwards the
message to the operator inbox. Nothing is stored.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from comingsoon.core.config import Settings, get_settings
from comingsoon.core.exceptions import (
    ContactValidationError,
    RelayConfigurationError,
    RelayDeliveryError,
)
from comingsoon.core.mailer import send_contact_email
from comingsoon.core.validation import INVALID_FORMAT, validate_submission
from comingsoon.models.contact import ContactErrorResponse, ContactSuccessResponse

router = APIRouter()
logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Email sent successfully"
INVALID_BODY_ERROR = "Invalid request body"
REQUIRED_FIELDS_ERROR = "All fields are required"
INVALID_EMAIL_ERROR = "Invalid email format"
CONFIGURATION_ERROR = "Server configuration error"
DELIVERY_ERROR = "Failed to send email. Please try again later."


def error_response(status_code: int, error: str, errors=None) -> JSONResponse:
    body = ContactErrorResponse(error=error, errors=errors)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def validation_error_message(errors) -> str:
    """Pick the summary line for a 400 response."""
    if any(code != INVALID_FORMAT for code in errors.values()):
        return REQUIRED_FIELDS_ERROR
    return INVALID_EMAIL_ERROR


@router.post(
    "/contact",
    status_code=status.HTTP_200_OK,
    response_model=ContactSuccessResponse,
    responses={
        400: {"model": ContactErrorResponse},
        500: {"model": ContactErrorResponse},
    },
)
async def submit_contact(request: Request, settings: Settings = Depends(get_settings)):
    """
    Relay a contact form submission to the operator inbox.

    Expects a JSON body with name, email and message.

    Returns:
        200 with a confirmation message, 400 with field errors,
        or 500 when the relay is misconfigured or the send fails
    """
    try:
        payload = await request.json()
    except ValueError:
        return error_response(status.HTTP_400_BAD_REQUEST, INVALID_BODY_ERROR)

    try:
        submission = validate_submission(payload)
        config = settings.relay_config()
        await send_contact_email(submission, config)

        return ContactSuccessResponse(message=SUCCESS_MESSAGE)

    except ContactValidationError as e:
        logger.info(f"Rejected contact submission: {e.errors}")
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            validation_error_message(e.errors),
            errors=e.errors,
        )
    except RelayConfigurationError as e:
        logger.error(f"❌ {str(e)}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, CONFIGURATION_ERROR)
    except RelayDeliveryError:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, DELIVERY_ERROR)
    except Exception as e:
        logger.exception(f"Error sending contact email: {str(e)}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, DELIVERY_ERROR)
