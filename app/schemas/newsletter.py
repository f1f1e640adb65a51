"""
Newsletter Schemas

Pydantic models for newsletter subscription.
"""

from pydantic import BaseModel, EmailStr, Field


class NewsletterSubscribeRequest(BaseModel):
    """Schema for a newsletter signup."""

    email: EmailStr = Field(..., description="Subscriber email address")
    source: str = Field(default="website_footer", max_length=64, description="Signup form location")


class NewsletterSubscribeResponse(BaseModel):
    """Schema for a successful signup."""

    id: str
    email: str
    message: str
