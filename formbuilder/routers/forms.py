"""Form builder endpoints"""
from fastapi import APIRouter, HTTPException, Depends, Query, status
from typing import List, Optional
import logging

from formbuilder.config import Settings, get_settings
from formbuilder.models.forms import (
    Form,
    FormCreateRequest,
    FormCreateResponse,
    Submission,
    SubmissionCreateResponse,
)
from formbuilder.services.form_store import FormStore, FormNotFoundError, get_form_store

logger = logging.getLogger(__name__)
router = APIRouter()


def share_link(settings: Settings, token: str) -> str:
    return f"{settings.frontend_url.rstrip('/')}/forms/{token}"


@router.post("", response_model=FormCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_form(
    payload: FormCreateRequest,
    store: FormStore = Depends(get_form_store),
    settings: Settings = Depends(get_settings)
):
    """Create a form and return its share link"""
    try:
        form = store.create_form(
            title=payload.title,
            description=payload.description,
            fields=payload.fields,
            created_by=payload.created_by
        )
        return FormCreateResponse(form=form, link=share_link(settings, form.share_token))

    except Exception as e:
        logger.error(f"Form creation error: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=List[Form])
async def list_forms(
    created_by: Optional[str] = Query(None, alias="createdBy"),
    store: FormStore = Depends(get_form_store)
):
    """List forms, optionally only those of one creator"""
    try:
        return store.list_forms(created_by=created_by)

    except Exception as e:
        logger.error(f"Form listing error: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{form_id}", response_model=Form)
async def get_form(form_id: str, store: FormStore = Depends(get_form_store)):
    """Get a form by its id"""
    try:
        return store.get_form_by_id(form_id)

    except FormNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Form lookup error for {form_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@router.post(
    "/{form_link}/submissions",
    response_model=SubmissionCreateResponse,
    status_code=status.HTTP_201_CREATED
)
async def submit_form(
    form_link: str,
    submission: Submission,
    store: FormStore = Depends(get_form_store)
):
    """Submit answers to a form (PUBLIC endpoint)"""
    try:
        store.append_submission(form_link, submission)
        return SubmissionCreateResponse(message="Submission successful")

    except FormNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Form submission error for {form_link}: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{form_link}/submissions", response_model=List[Submission])
async def get_submissions(form_link: str, store: FormStore = Depends(get_form_store)):
    """Get all submissions of a form in the order they arrived"""
    try:
        return store.list_submissions(form_link)

    except FormNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Submission listing error for {form_link}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
