"""Form persistence on Supabase

Forms live in the ``forms`` table; each submission is one row of
``form_submissions``, so appending never rewrites the form row and
concurrent submissions cannot overwrite each other.
"""
import logging
import secrets
import string
import uuid
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Optional, Union

from postgrest.exceptions import APIError
from pydantic import ValidationError
from supabase import Client

from formbuilder.config import get_settings
from formbuilder.database import get_supabase_admin
from formbuilder.models.forms import FieldDefinition, Form, Submission

logger = logging.getLogger(__name__)

FORMS_TABLE = "forms"
SUBMISSIONS_TABLE = "form_submissions"

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"

SHARE_TOKEN_ALPHABET = string.ascii_letters + string.digits


class FormStoreError(Exception):
    """Base class for form store failures"""


class FormNotFoundError(FormStoreError):
    """No form matches the given id or share token"""

    def __init__(self, message: str = "Form not found"):
        super().__init__(message)


class FormValidationError(FormStoreError):
    """Form payload is malformed"""


class ShareTokenUnavailableError(FormStoreError):
    """Every generated share token collided with an existing one"""


def generate_share_token(length: int = 10) -> str:
    """Generate a random alphanumeric share token"""
    return "".join(secrets.choice(SHARE_TOKEN_ALPHABET) for _ in range(length))


def _validate_fields(fields: Iterable[Union[FieldDefinition, Dict[str, Any]]]) -> List[FieldDefinition]:
    validated = []
    for index, field in enumerate(fields or []):
        if isinstance(field, FieldDefinition):
            validated.append(field)
            continue
        try:
            validated.append(FieldDefinition.model_validate(field))
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'field'}: {err['msg']}"
                for err in e.errors()
            )
            raise FormValidationError(f"Invalid field definition at position {index}: {problems}")
    return validated


def _row_to_form(row: Dict[str, Any], submissions: Optional[List[Submission]] = None) -> Form:
    return Form(
        id=str(row["id"]),
        title=row.get("title"),
        description=row.get("description"),
        fields=row.get("fields") or [],
        created_by=row.get("created_by"),
        share_token=row["share_token"],
        submissions=submissions or [],
    )


def _row_to_submission(row: Dict[str, Any]) -> Submission:
    return Submission(user_id=row.get("user_id"), responses=row.get("responses") or {})


class FormStore:
    """Create and look up forms and their submissions"""

    def __init__(self, client: Client, token_length: int = 10, max_token_attempts: int = 5):
        self.client = client
        self.token_length = token_length
        self.max_token_attempts = max_token_attempts

    def create_form(
        self,
        title: Optional[str],
        description: Optional[str],
        fields: Iterable[Union[FieldDefinition, Dict[str, Any]]],
        created_by: Optional[str],
    ) -> Form:
        """
        Persist a new form under a freshly generated share token

        Raises:
            FormValidationError: If a field definition lacks name or type
            ShareTokenUnavailableError: If no unique token could be allocated
        """
        field_defs = _validate_fields(fields)
        row = {
            "title": title,
            "description": description,
            "fields": [f.model_dump() for f in field_defs],
            "created_by": created_by,
        }

        for attempt in range(1, self.max_token_attempts + 1):
            token = generate_share_token(self.token_length)
            if self._find_form_row("share_token", token):
                logger.warning(f"Share token collision on lookup, attempt {attempt}/{self.max_token_attempts}")
                continue

            try:
                result = self.client.table(FORMS_TABLE).insert({**row, "share_token": token}).execute()
            except APIError as e:
                if e.code != UNIQUE_VIOLATION:
                    raise
                logger.warning(f"Share token collision on insert, attempt {attempt}/{self.max_token_attempts}")
                continue

            form = _row_to_form(result.data[0])
            logger.info(f"Created form {form.id} with share token {form.share_token}")
            return form

        raise ShareTokenUnavailableError(
            f"Could not allocate a unique share token after {self.max_token_attempts} attempts"
        )

    def get_form_by_id(self, form_id: str) -> Form:
        try:
            form_id = str(uuid.UUID(str(form_id)))
        except ValueError:
            raise FormNotFoundError()

        row = self._find_form_row("id", form_id)
        if not row:
            raise FormNotFoundError()
        return _row_to_form(row, self._submission_rows(row["id"]))

    def get_form_by_token(self, token: str) -> Form:
        row = self._require_form_row(token)
        return _row_to_form(row, self._submission_rows(row["id"]))

    def append_submission(self, token: str, submission: Submission) -> None:
        """Append a submission to the form; responses are stored as given"""
        row = self._require_form_row(token)
        self.client.table(SUBMISSIONS_TABLE).insert({
            "form_id": row["id"],
            "user_id": submission.user_id,
            "responses": submission.responses,
        }).execute()
        logger.info(f"Stored submission from {submission.user_id} for form {row['id']}")

    def list_submissions(self, token: str) -> List[Submission]:
        row = self._require_form_row(token)
        return self._submission_rows(row["id"])

    def list_forms(self, created_by: Optional[str] = None) -> List[Form]:
        """List forms newest first, without their submissions"""
        query = self.client.table(FORMS_TABLE).select("*")
        if created_by:
            query = query.eq("created_by", created_by)
        result = query.order("created_at", desc=True).execute()
        return [_row_to_form(row) for row in (result.data or [])]

    def _find_form_row(self, column: str, value: str) -> Optional[Dict[str, Any]]:
        result = self.client.table(FORMS_TABLE).select("*").eq(column, value).limit(1).execute()
        return result.data[0] if result.data else None

    def _require_form_row(self, token: str) -> Dict[str, Any]:
        row = self._find_form_row("share_token", token)
        if not row:
            raise FormNotFoundError()
        return row

    def _submission_rows(self, form_id: str) -> List[Submission]:
        result = self.client.table(SUBMISSIONS_TABLE).select(
            "user_id, responses"
        ).eq("form_id", form_id).order("id").execute()
        return [_row_to_submission(row) for row in (result.data or [])]


@lru_cache()
def get_form_store() -> FormStore:
    """FastAPI dependency returning the shared form store"""
    settings = get_settings()
    return FormStore(
        get_supabase_admin(),
        token_length=settings.share_token_length,
        max_token_attempts=settings.share_token_attempts,
    )
