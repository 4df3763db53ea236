from pydantic import BaseModel, Field

from journey_link.models.stops import Stop

# Field keys used in ValidationResult.errors, in evaluation order
FIELD_FROM_ADDRESS = "fromAddress"
FIELD_DATE = "date"
FIELD_TIME = "time"


class FormState(BaseModel):
    """Current contents of the navigation form."""

    date: str = ""
    time: str = ""
    from_address: str = ""
    selected_stop: Stop | None = Field(
        default=None, description="Set only by explicit selection from the candidate list"
    )


class FieldValidation(BaseModel):
    is_valid: bool
    message: str = ""


class ValidationResult(BaseModel):
    is_valid: bool
    errors: dict[str, str] = Field(
        default_factory=dict, description="Field name -> message, in evaluation order"
    )
    first_error: str = Field(default="", description="Message of the first failing field")


class NavigationResult(BaseModel):
    """Outcome of pressing the go button: the validation and, if valid, the link."""

    validation: ValidationResult
    deep_link: str | None = Field(default=None, description="Set only when validation passed")
