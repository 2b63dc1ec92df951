"""Form-related Pydantic models"""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Dict, Any, List, Literal, Optional


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FieldDefinition(CamelModel):
    """One named, typed input slot of a form"""
    name: str = Field(..., min_length=1)
    type: Literal["text", "number"]
    required: bool = False


class Submission(CamelModel):
    """One respondent's answers"""
    user_id: Optional[str] = None
    responses: Dict[str, Any] = Field(default_factory=dict)


class Form(CamelModel):
    """Stored form with its submissions"""
    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    fields: List[FieldDefinition] = Field(default_factory=list)
    created_by: Optional[str] = None
    share_token: str
    submissions: List[Submission] = Field(default_factory=list)


class FormCreateRequest(CamelModel):
    """Create form request"""
    title: Optional[str] = None
    description: Optional[str] = None
    fields: List[FieldDefinition] = Field(default_factory=list)
    created_by: Optional[str] = None


class FormCreateResponse(CamelModel):
    """Create form response"""
    form: Form
    link: str


class SubmissionCreateResponse(CamelModel):
    """Submission accepted response"""
    message: str
