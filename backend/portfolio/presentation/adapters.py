"""View Adapters — reshape stored documents into what the frontend cards render.

Invariants:
    - Adapters are read-only: they never mutate the document passed in
    - Every image in adapter output carries src, srcset and placeholder variants
    - Certificate preview priority: primary file (image, else PDF thumbnail),
      then the certificate image, then a fallback with url None
    - Works on ORM instances and plain objects alike (attribute access only)
"""

import json
from datetime import date

from portfolio.presentation.media_urls import image_variants

CARD_IMAGE_WIDTH = 800

_NEUTRAL = "bg-gray-100 text-gray-700"

CERTIFICATE_CATEGORY_COLORS = {
    "workshop": "bg-purple-100 text-purple-700",
    "course": "bg-blue-100 text-blue-700",
    "certification": "bg-green-100 text-green-700",
}

PROJECT_STATUS_COLORS = {
    "completed": "bg-green-100 text-green-700",
    "in-progress": "bg-yellow-100 text-yellow-700",
    "planned": "bg-blue-100 text-blue-700",
}


def _get(obj, key, default=None):
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


def _value(v):
    """Enum members and plain strings both render as their string value."""
    return getattr(v, "value", v)


def parse_skills(skills) -> list[str]:
    """Flatten skills that may arrive as JSON-encoded arrays inside strings."""
    if skills is None:
        return []
    if isinstance(skills, str):
        skills = [skills]
    if not isinstance(skills, (list, tuple)):
        return []
    flat: list[str] = []
    for skill in skills:
        if isinstance(skill, str) and skill.strip().startswith("["):
            try:
                parsed = json.loads(skill)
            except ValueError:
                parsed = [skill]
            if not isinstance(parsed, list):
                parsed = [skill]
            flat.extend(str(s) for s in parsed if s is not None)
        elif isinstance(skill, str):
            flat.append(skill)
    return [s.strip() for s in flat if s and s.strip()]


def primary_file(files) -> dict | None:
    files = files or []
    if not files:
        return None
    for f in files:
        if _get(f, "is_primary"):
            return f
    return files[0]


def _image_block(kind: str, url: str | None, alt: str, **extra) -> dict:
    block = {"type": kind, "alt": alt, **extra}
    if url:
        block.update(image_variants(url, width=CARD_IMAGE_WIDTH, alt=alt))
    else:
        block["src"] = None
    return block


def certificate_preview(certificate) -> dict:
    """Pick what a certificate card shows as its image."""
    title = _get(certificate, "title") or ""
    primary = primary_file(_get(certificate, "files"))
    if primary is not None:
        mime = _get(primary, "mime_type") or ""
        name = _get(primary, "original_name") or title
        if mime.startswith("image/"):
            return _image_block("image", _get(primary, "url"), name)
        if "pdf" in mime:
            return _image_block(
                "pdf", _get(primary, "thumbnail_url"), name,
                file_url=_get(primary, "url"),
            )
    image = _get(certificate, "image")
    if image and _get(image, "url"):
        return _image_block("image", _get(image, "url"), _get(image, "alt") or title)
    return _image_block("fallback", None, "No preview available")


def certificate_badge(certificate) -> dict:
    category = _value(_get(certificate, "category")) or "certificate"
    return {
        "text": category,
        "color": CERTIFICATE_CATEGORY_COLORS.get(category, _NEUTRAL),
    }


def visibility_badge(document) -> dict:
    visible = bool(_get(document, "visible", True))
    return {
        "visible": visible,
        "text": "Visible" if visible else "Hidden",
        "color": "bg-green-100 text-green-700" if visible else _NEUTRAL,
    }


def expiry_info(certificate, today: date | None = None) -> dict | None:
    expiry = _get(certificate, "expiry_date")
    if not expiry:
        return None
    today = today or date.today()
    return {
        "date": expiry.isoformat(),
        "is_expired": expiry < today,
        "days_until_expiry": (expiry - today).days,
    }


def certificate_view(certificate, today: date | None = None) -> dict:
    links = []
    if _get(certificate, "credential_url"):
        links.append({
            "type": "credential",
            "url": _get(certificate, "credential_url"),
            "label": "Verify Certificate",
        })
    return {
        "preview": certificate_preview(certificate),
        "badge": certificate_badge(certificate),
        "visibility": visibility_badge(certificate),
        "subtitle": _get(certificate, "issuer") or "Unknown",
        "skills": parse_skills(_get(certificate, "skills")),
        "links": links,
        "expiry": expiry_info(certificate, today),
        "files": [
            {
                "name": _get(f, "original_name"),
                "url": _get(f, "url"),
                "icon": file_icon(f),
                "size": format_file_size(_get(f, "size")),
            }
            for f in (_get(certificate, "files") or [])
        ],
    }


def project_preview(project) -> dict:
    images = _get(project, "images") or []
    title = _get(project, "title") or ""
    if images:
        chosen = primary_file(images)
        return _image_block("custom", _get(chosen, "url"), _get(chosen, "alt") or title)
    return _image_block("fallback", None, "No preview available")


def project_badge(project) -> dict:
    status = _value(_get(project, "status"))
    return {
        "text": status.replace("-", " ") if status else "Unknown",
        "color": PROJECT_STATUS_COLORS.get(status, _NEUTRAL),
    }


def project_links(project) -> list[dict]:
    links = []
    for index, url in enumerate(_get(project, "live_urls") or [], start=1):
        if url:
            links.append({"type": "live", "url": url, "label": f"Live Demo {index}"})
    for index, url in enumerate(_get(project, "github_urls") or [], start=1):
        if url:
            links.append({"type": "github", "url": url, "label": f"GitHub {index}"})
    return links


def project_view(project) -> dict:
    return {
        "preview": project_preview(project),
        "gallery": [
            image_variants(_get(img, "url"), width=CARD_IMAGE_WIDTH, alt=_get(img, "alt") or "")
            for img in (_get(project, "images") or [])
        ],
        "badge": project_badge(project),
        "visibility": visibility_badge(project),
        "subtitle": _value(_get(project, "category")) or "Unknown",
        "links": project_links(project),
    }


def format_file_size(size: int | None) -> str:
    if not size:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(units) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {units[unit]}"


def file_icon(file) -> str:
    mime = _get(file, "mime_type") or ""
    if mime.startswith("image/"):
        return "Image"
    if "pdf" in mime:
        return "FileText"
    return "File"
