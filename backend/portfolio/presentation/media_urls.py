"""Media URL Transformer — rewrites Cloudinary delivery URLs into optimized variants.

Invariants:
    - Pure string rewrite: no network access, no I/O
    - URLs without the media host or the /upload/ marker pass through unchanged
    - Token order is always w, q, f, c, dpr (then e when an effect is requested)
    - Invalid option values fall back to the option default, never raise
    - Placeholders request width <= 20 and quality <= 30 whatever the caller asks

Design Decisions:
    - ImageTransform is a frozen dataclass so identical inputs hash identically
      and the rewrite can be memoized
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from numbers import Real

logger = logging.getLogger(__name__)

MEDIA_HOST = "cloudinary.com"
UPLOAD_MARKER = "/upload/"

DEFAULT_SRCSET_WIDTHS = (400, 800, 1200, 1600)

PLACEHOLDER_MAX_WIDTH = 20
PLACEHOLDER_MAX_QUALITY = 30
PLACEHOLDER_EFFECT = "blur:1000"

AUTO = "auto"
DEFAULT_CROP = "scale"

CROP_MODES = frozenset({
    "scale", "fill", "fit", "limit", "mfit", "pad", "lpad", "mpad",
    "fill_pad", "thumb", "crop", "imagga_scale", "imagga_crop",
})
FORMATS = frozenset({
    "auto", "webp", "avif", "jpg", "jpeg", "png", "gif", "jxl", "heic", "svg",
})


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _as_int(value):
    """ASCII digit strings become ints; anything else passes through."""
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    return value


def _normalize_width(value) -> int | str:
    if value == AUTO:
        return AUTO
    value = _as_int(value)
    if _is_number(value) and value >= 1 and float(value).is_integer():
        return int(value)
    return AUTO


def _normalize_quality(value) -> int | str:
    if value == AUTO:
        return AUTO
    value = _as_int(value)
    if _is_number(value) and float(value).is_integer() and 1 <= value <= 100:
        return int(value)
    return AUTO


def _normalize_format(value) -> str:
    if isinstance(value, str) and value.lower() in FORMATS:
        return value.lower()
    return AUTO


def _normalize_crop(value) -> str:
    if isinstance(value, str) and value.lower() in CROP_MODES:
        return value.lower()
    return DEFAULT_CROP


def _normalize_dpr(value) -> str:
    if value == AUTO:
        return AUTO
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return AUTO
    if _is_number(value) and 0 < value <= 5:
        return f"{float(value):.1f}"
    return AUTO


def _normalize_effect(value) -> str | None:
    if isinstance(value, str) and value and "," not in value and "/" not in value:
        return value
    return None


@dataclass(frozen=True)
class ImageTransform:
    """Normalized transformation request. Build with from_options()."""
    width: int | str = AUTO
    quality: int | str = AUTO
    format: str = AUTO
    crop: str = DEFAULT_CROP
    dpr: str = AUTO
    effect: str | None = None

    @classmethod
    def from_options(cls, **options) -> "ImageTransform":
        unknown = set(options) - {"width", "quality", "format", "crop", "dpr", "effect"}
        if unknown:
            logger.debug(f"Ignoring unknown image options: {sorted(unknown)}")
        return cls(
            width=_normalize_width(options.get("width", AUTO)),
            quality=_normalize_quality(options.get("quality", AUTO)),
            format=_normalize_format(options.get("format", AUTO)),
            crop=_normalize_crop(options.get("crop", DEFAULT_CROP)),
            dpr=_normalize_dpr(options.get("dpr", AUTO)),
            effect=_normalize_effect(options.get("effect")),
        )

    def tokens(self) -> list[str]:
        tokens = [
            f"w_{self.width}",
            f"q_{self.quality}",
            f"f_{self.format}",
            f"c_{self.crop}",
            f"dpr_{self.dpr}",
        ]
        if self.effect:
            tokens.append(f"e_{self.effect}")
        return tokens


def is_media_url(url) -> bool:
    """True when url points at the media host and carries the upload marker."""
    return isinstance(url, str) and MEDIA_HOST in url and UPLOAD_MARKER in url


@lru_cache(maxsize=2048)
def _apply(url: str, transform: ImageTransform) -> str:
    split_at = url.index(UPLOAD_MARKER) + len(UPLOAD_MARKER)
    return f"{url[:split_at]}{','.join(transform.tokens())}/{url[split_at:]}"


def optimize_image_url(url: str | None, **options) -> str:
    """Return the optimized-variant URL, or the input unchanged when it is not a media URL.

    Recognized options: width, quality, format, crop, dpr, effect.
    """
    if not is_media_url(url):
        return url if isinstance(url, str) else ""
    return _apply(url, ImageTransform.from_options(**options))


def build_srcset(
    url: str | None, widths=DEFAULT_SRCSET_WIDTHS, **options,
) -> str:
    """Responsive candidate list: "<url> 400w, <url> 800w, ..." ("" for non-media URLs)."""
    if not is_media_url(url):
        return ""
    options.setdefault("quality", AUTO)
    options.setdefault("format", AUTO)
    candidates = []
    for width in widths:
        normalized = _normalize_width(width)
        if normalized == AUTO:
            continue
        variant = optimize_image_url(url, **{**options, "width": normalized})
        candidates.append(f"{variant} {normalized}w")
    return ", ".join(candidates)


def blur_placeholder(url: str | None, **options) -> str:
    """Tiny blurred variant shown while the full image loads ("" for non-media URLs)."""
    if not is_media_url(url):
        return ""
    width = _normalize_width(options.get("width", PLACEHOLDER_MAX_WIDTH))
    quality = _normalize_quality(options.get("quality", PLACEHOLDER_MAX_QUALITY))
    if width == AUTO or width > PLACEHOLDER_MAX_WIDTH:
        width = PLACEHOLDER_MAX_WIDTH
    if quality == AUTO or quality > PLACEHOLDER_MAX_QUALITY:
        quality = PLACEHOLDER_MAX_QUALITY
    return optimize_image_url(
        url,
        **{
            **options,
            "width": width,
            "quality": quality,
            "effect": PLACEHOLDER_EFFECT,
        },
    )


def image_variants(url: str | None, width: int | str = AUTO, alt: str = "") -> dict:
    """Everything a client needs to render one image progressively."""
    return {
        "original": url,
        "src": optimize_image_url(url, width=width, quality=AUTO, format=AUTO),
        "srcset": build_srcset(url),
        "placeholder": blur_placeholder(url),
        "alt": alt,
    }
