"""
Bulk notification endpoint.

POST /api/send-email fans one email out per student and always answers
200 once dispatch was attempted; per-recipient failures are reported in
the result tally, not the status code.
"""
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from command_center.schemas.email import EmailRecipient, RejectionRecipient
from command_center.services.email import email_service

logger = logging.getLogger(__name__)
router = APIRouter()

INVALID_REQUEST = "Invalid request. Type and students array are required."


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": message})


@router.post("/api/send-email")
async def send_email(request: Request):
    try:
        try:
            body = await request.json()
        except ValueError:
            return _bad_request(INVALID_REQUEST)

        if not isinstance(body, dict):
            return _bad_request(INVALID_REQUEST)

        email_type = body.get("type")
        students = body.get("students")
        if not email_type or not isinstance(students, list):
            return _bad_request(INVALID_REQUEST)
        if not all(isinstance(s, dict) for s in students):
            return _bad_request(INVALID_REQUEST)

        if email_type == "profile_approval":
            recipient_schema = EmailRecipient
        elif email_type == "profile_rejection":
            recipient_schema = RejectionRecipient
        else:
            return _bad_request("Invalid email type")

        try:
            recipients = [recipient_schema.model_validate(s) for s in students]
        except ValidationError as e:
            logger.warning(f"send-email {email_type}: malformed student entry: {e.error_count()} error(s)")
            return _bad_request(INVALID_REQUEST)

        if email_type == "profile_approval":
            result = await email_service.send_bulk_profile_approval_notifications(recipients)
            message = "Email notifications sent successfully"
        else:
            result = await email_service.send_bulk_profile_rejection_notifications(recipients)
            message = "Rejection email notifications sent successfully"

        logger.info(
            f"send-email {email_type}: {result.success_count}/{result.attempted} delivered"
        )
        return {
            "success": True,
            "message": message,
            "result": result.model_dump(by_alias=True),
        }

    except Exception as e:
        logger.error(f"Error in send-email API: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(e)},
        )


@router.get("/api/send-email")
async def test_email_configuration():
    """Check outbound email settings."""
    try:
        if await email_service.test_email_configuration():
            return {"success": True, "message": "Email configuration is valid"}
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Email configuration is invalid"},
        )
    except Exception as e:
        logger.error(f"Error testing email configuration: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": "Error testing email configuration",
                "error": str(e),
            },
        )
