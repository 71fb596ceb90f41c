"""Content Schemas — verifies field limits and normalization at the API boundary.

Tests:
    - Project text is stripped and URL lists drop blanks
    - Report type decides which URL field is required
    - Certificate skills are flattened and dates ordered
    - Contact form strips before length checks; blank subject becomes None
    - About needs a non-blank bio paragraph; skill colors must be hex
"""

from datetime import date

import pytest
from pydantic import ValidationError

from portfolio.schemas.about import AboutUpdate
from portfolio.schemas.certificate import CertificateCreate, CertificateUpdate
from portfolio.schemas.common import PageMeta
from portfolio.schemas.configuration import ConfigurationResponse
from portfolio.schemas.contact import ContactCreate
from portfolio.schemas.project import ProjectCreate, ProjectUpdate, Report
from portfolio.schemas.skill import SkillCreate, SkillUpdate


def _project(**overrides):
    data = {
        "title": "  Portfolio  ",
        "description": "A site.",
        "short_description": "Short",
    }
    data.update(overrides)
    return ProjectCreate(**data)


def test_project_title_is_stripped():
    assert _project().title == "Portfolio"


def test_project_whitespace_title_rejected():
    with pytest.raises(ValidationError):
        _project(title="   ")


def test_project_short_description_limit():
    with pytest.raises(ValidationError):
        _project(short_description="x" * 501)


def test_project_url_lists_drop_blanks():
    project = _project(live_urls=["https://a.dev", " ", ""], technologies=[" Python "])
    assert project.live_urls == ["https://a.dev"]
    assert project.technologies == ["Python"]


def test_project_rejects_unknown_category():
    with pytest.raises(ValidationError):
        _project(category="embedded")


def test_project_update_tracks_sent_fields():
    update = ProjectUpdate(featured=True)
    assert update.model_dump(exclude_unset=True) == {"featured": True}


def test_report_type_fields():
    Report(title="Write-up", type="link", link_url="https://blog.dev/post")
    with pytest.raises(ValidationError):
        Report(title="Write-up", type="file")
    with pytest.raises(ValidationError):
        Report(title="Write-up", type="link")


def test_report_gets_generated_id():
    first = Report(title="A", type="file", file_url="https://x/a.pdf")
    second = Report(title="B", type="file", file_url="https://x/b.pdf")
    assert first.id and first.id != second.id


def test_certificate_skills_flattened():
    cert = CertificateCreate(
        title="Course", issuer="Uni", issue_date=date(2024, 1, 1),
        skills=['["Python","SQL"]', "Git"],
    )
    assert cert.skills == ["Python", "SQL", "Git"]


def test_certificate_expiry_before_issue_rejected():
    with pytest.raises(ValidationError):
        CertificateCreate(
            title="Course", issuer="Uni",
            issue_date=date(2024, 1, 1), expiry_date=date(2023, 1, 1),
        )


def test_certificate_update_keeps_missing_skills_unset():
    assert "skills" not in CertificateUpdate(title="New").model_dump(exclude_unset=True)


def test_contact_strips_before_length_checks():
    with pytest.raises(ValidationError):
        ContactCreate(name=" A ", email="a@example.com", message="long enough message")
    with pytest.raises(ValidationError):
        ContactCreate(name="Ana", email="a@example.com", message="   short   ")


def test_contact_blank_subject_becomes_none():
    contact = ContactCreate(
        name="Ana", email="ana@example.com", subject="   ", message="Hello there, nice site!",
    )
    assert contact.subject is None


def test_contact_rejects_bad_email():
    with pytest.raises(ValidationError):
        ContactCreate(name="Ana", email="not-an-email", message="Hello there, nice site!")


def test_about_requires_bio_paragraph():
    with pytest.raises(ValidationError):
        AboutUpdate(name="Ana", title="Engineer", bio=["  ", ""])
    about = AboutUpdate(name="Ana", title="Engineer", bio=[" First. ", "", "Second."])
    assert about.bio == ["First.", "Second."]


def test_skill_color_must_be_hex():
    SkillCreate(name="Python", color="#3776AB")
    with pytest.raises(ValidationError):
        SkillCreate(name="Python", color="blue")


def test_skill_update_strips_name():
    assert SkillUpdate(name="  Rust ").name == "Rust"
    with pytest.raises(ValidationError):
        SkillUpdate(name="   ")


def test_configuration_defaults():
    config = ConfigurationResponse()
    assert config.settings.enable_contact_form is True
    assert config.theme.primary_color == "#3B82F6"
    assert config.id is None


@pytest.mark.parametrize("total, limit, pages", [(0, 10, 0), (10, 10, 1), (11, 10, 2)])
def test_page_meta_pages(total, limit, pages):
    assert PageMeta.build(1, limit, total).pages == pages
