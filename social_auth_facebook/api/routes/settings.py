"""API routes for the Facebook login settings form."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from social_auth_facebook.core.config import settings
from social_auth_facebook.core.logging import get_logger
from social_auth_facebook.db import get_db
from social_auth_facebook.forms import FacebookAuthSettingsForm, FormValidationError
from social_auth_facebook.forms.facebook_settings import SAVED_MESSAGE
from social_auth_facebook.schemas.settings import (
    FacebookAuthSettings,
    SettingsErrorResponse,
    SettingsFormResponse,
    SettingsSubmitResponse,
)
from social_auth_facebook.services.config_store import ConfigStore
from social_auth_facebook.services.request_context import RequestContext
from social_auth_facebook.services.roles import RoleService

logger = get_logger(__name__)

router = APIRouter(prefix="/settings/facebook", tags=["settings"])


def get_request_context(request: Request) -> RequestContext:
    """Dependency for the current request context."""
    return RequestContext.from_request(request, base_url=settings.base_url)


def get_settings_form(
    db: AsyncSession = Depends(get_db),
    request_context: RequestContext = Depends(get_request_context),
) -> FacebookAuthSettingsForm:
    """Dependency that assembles the settings form for this request."""
    return FacebookAuthSettingsForm(
        config_store=ConfigStore(db),
        request_context=request_context,
        role_provider=RoleService(db),
    )


@router.get("", response_model=FacebookAuthSettings)
async def get_facebook_settings(
    form: FacebookAuthSettingsForm = Depends(get_settings_form),
) -> FacebookAuthSettings:
    """Get the current Facebook login settings.

    Returns defaults for any value that was never saved.
    """
    return await form.load_settings()


@router.get("/form", response_model=SettingsFormResponse)
async def get_facebook_settings_form(
    form: FacebookAuthSettingsForm = Depends(get_settings_form),
) -> SettingsFormResponse:
    """Get the settings form description.

    The read-only fields (OAuth redirect URL, app domain, site URL) are
    computed from the current request and are meant to be copied into the
    Facebook App dashboard.
    """
    return await form.build_form()


@router.post(
    "",
    response_model=SettingsSubmitResponse,
    responses={400: {"model": SettingsErrorResponse}},
)
async def submit_facebook_settings(
    values: dict[str, Any] = Body(...),
    form: FacebookAuthSettingsForm = Depends(get_settings_form),
) -> SettingsSubmitResponse:
    """Validate and save the Facebook login settings.

    All seven settings are saved together. Nothing is saved when any
    field fails validation.
    """
    try:
        record = await form.submit_form(values)
    except FormValidationError as e:
        raise HTTPException(
            status_code=400,
            detail=SettingsErrorResponse(
                message="The settings could not be saved.",
                errors=e.by_field(),
            ).model_dump(),
        )

    logger.info("facebook_settings_updated_via_api")

    return SettingsSubmitResponse(settings=record, message=SAVED_MESSAGE)
