"""Configuration Schemas — site settings singleton with defaults for every block."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SiteInfo(BaseModel):
    name: str = Field("", max_length=100)
    title: str = Field("", max_length=200)
    short_bio: str = Field("", max_length=500)
    tagline: str = Field("", max_length=200)
    website: str = Field("", max_length=2000)


class ContactInfo(BaseModel):
    email: str = Field("", max_length=255)
    phone: str = Field("", max_length=50)
    location: str = Field("", max_length=200)


class Stats(BaseModel):
    years_experience: int = Field(0, ge=0)
    projects_count: int = Field(0, ge=0)
    technologies_count: int = Field(0, ge=0)
    certificates_count: int = Field(0, ge=0)


class Seo(BaseModel):
    title: str = Field("", max_length=200)
    description: str = Field("", max_length=500)
    keywords: str = Field("", max_length=500)
    author: str = Field("", max_length=100)
    og_image: str = Field("", max_length=2000)


class Theme(BaseModel):
    primary_color: str = "#3B82F6"
    secondary_color: str = "#1E40AF"
    accent_color: str = "#F59E0B"
    background_color: str = "#F9FAFB"
    text_color: str = "#111827"


class SiteSettings(BaseModel):
    show_resume: bool = True
    show_projects: bool = True
    show_skills: bool = True
    show_certificates: bool = True
    show_contact: bool = True
    enable_contact_form: bool = True
    maintenance_mode: bool = False
    maintenance_message: str = Field(
        "Site is under maintenance. Please check back later.", max_length=500,
    )


class NavItem(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    href: str = Field(min_length=1, max_length=200)
    visible: bool = True


class Footer(BaseModel):
    brand_name: str = Field("", max_length=100)
    description: str = Field("", max_length=500)
    show_admin_link: bool = True


class ConfigurationUpdate(BaseModel):
    site_info: SiteInfo = Field(default_factory=SiteInfo)
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    social_links: dict[str, str] = Field(default_factory=dict)
    stats: Stats = Field(default_factory=Stats)
    seo: Seo = Field(default_factory=Seo)
    theme: Theme = Field(default_factory=Theme)
    settings: SiteSettings = Field(default_factory=SiteSettings)
    navigation: list[NavItem] = Field(default_factory=list)
    footer: Footer = Field(default_factory=Footer)


class ConfigurationResponse(ConfigurationUpdate):
    model_config = ConfigDict(from_attributes=True)

    id: UUID | None = None
    updated_at: datetime | None = None
