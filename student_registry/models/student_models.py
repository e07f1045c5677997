from pydantic import ConfigDict, Field

from student_registry.schemas.camel_base_model import CamelCaseBaseModel


class Student(CamelCaseBaseModel):
    """A registered student as held by the record store."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Internal record key")
    display_id: str = Field(..., description="Human-facing student code")
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    email: str = Field(..., description="Email address, unique ignoring case")
    phone: str = Field(..., description="Contact phone number")
    course: str = Field(..., description="Enrolled course")
    enrollment_date: str = Field(..., description="Enrollment date (YYYY-MM-DD)")
