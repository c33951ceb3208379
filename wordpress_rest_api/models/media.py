"""Media (attachment) models and the registered MIME type table."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import Rendered, ResponseModel
from .links import BaseLink


class ImageSize(ResponseModel):
    file: str = ""
    width: int = 0
    height: int = 0
    mime_type: str = ""
    source_url: str = ""


class ImageMeta(ResponseModel):
    aperture: str = ""
    credit: str = ""
    camera: str = ""
    caption: str = ""
    created_timestamp: str = ""
    copyright: str = ""
    focal_length: str = ""
    iso: str = ""
    shutter_speed: str = ""
    title: str = ""
    orientation: str = ""


class MediaDetails(ResponseModel):
    """Decoded ``_wp_attachment_metadata``. Empty when the blob is absent or malformed."""

    width: int | None = None
    height: int | None = None
    file: str | None = None
    image_meta: ImageMeta | None = None
    sizes: dict[str, ImageSize] | None = None


class Media(ResponseModel):
    """Featured media as embedded under ``wp:featuredmedia``."""

    id: int
    date: datetime | None = None
    slug: str = ""
    type: str = "attachment"
    link: str = ""
    title: Rendered = Field(default_factory=Rendered)
    author: int = 0
    caption: Rendered = Field(default_factory=Rendered)
    alt_text: str = ""
    media_type: str = "file"
    mime_type: str = ""
    media_details: MediaDetails = Field(default_factory=MediaDetails)
    source_url: str = ""
    links: BaseLink = Field(default_factory=BaseLink, alias="_links")


# Extension patterns registered by WordPress (wp_get_mime_types)
MIME_TYPES: dict[str, str] = {
    # Image formats.
    "jpg|jpeg|jpe": "image/jpeg",
    "gif": "image/gif",
    "png": "image/png",
    "bmp": "image/bmp",
    "tiff|tif": "image/tiff",
    "webp": "image/webp",
    "ico": "image/x-icon",
    # Video formats.
    "asf|asx": "video/x-ms-asf",
    "wmv": "video/x-ms-wmv",
    "wmx": "video/x-ms-wmx",
    "wm": "video/x-ms-wm",
    "avi": "video/avi",
    "divx": "video/divx",
    "flv": "video/x-flv",
    "mov|qt": "video/quicktime",
    "mpeg|mpg|mpe": "video/mpeg",
    "mp4|m4v": "video/mp4",
    "ogv": "video/ogg",
    "webm": "video/webm",
    "mkv": "video/x-matroska",
    "3gp|3gpp": "video/3gpp",
    "3g2|3gp2": "video/3gpp2",
    # Text formats.
    "txt|asc|c|cc|h|srt": "text/plain",
    "csv": "text/csv",
    "tsv": "text/tab-separated-values",
    "ics": "text/calendar",
    "rtx": "text/richtext",
    "css": "text/css",
    "htm|html": "text/html",
    "vtt": "text/vtt",
    "dfxp": "application/ttaf+xml",
    # Audio formats.
    "mp3|m4a|m4b": "audio/mpeg",
    "ra|ram": "audio/x-realaudio",
    "wav": "audio/wav",
    "ogg|oga": "audio/ogg",
    "flac": "audio/flac",
    "mid|midi": "audio/midi",
    "wma": "audio/x-ms-wma",
    "wax": "audio/x-ms-wax",
    "mka": "audio/x-matroska",
    # Misc application formats.
    "rtf": "application/rtf",
    "js": "application/javascript",
    "pdf": "application/pdf",
    "swf": "application/x-shockwave-flash",
    "class": "application/java",
    "tar": "application/x-tar",
    "zip": "application/zip",
    "gz|gzip": "application/x-gzip",
    "rar": "application/rar",
    "7z": "application/x-7z-compressed",
    "exe": "application/x-msdownload",
    "psd": "application/octet-stream",
    "xcf": "application/octet-stream",
    # MS Office formats.
    "doc": "application/msword",
    "pot|pps|ppt": "application/vnd.ms-powerpoint",
    "wri": "application/vnd.ms-write",
    "xla|xls|xlt|xlw": "application/vnd.ms-excel",
    "mdb": "application/vnd.ms-access",
    "mpp": "application/vnd.ms-project",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "docm": "application/vnd.ms-word.document.macroEnabled.12",
    "dotx": "application/vnd.openxmlformats-officedocument.wordprocessingml.template",
    "dotm": "application/vnd.ms-word.template.macroEnabled.12",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "xlsm": "application/vnd.ms-excel.sheet.macroEnabled.12",
    "xlsb": "application/vnd.ms-excel.sheet.binary.macroEnabled.12",
    "xltx": "application/vnd.openxmlformats-officedocument.spreadsheetml.template",
    "xltm": "application/vnd.ms-excel.template.macroEnabled.12",
    "xlam": "application/vnd.ms-excel.addin.macroEnabled.12",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "pptm": "application/vnd.ms-powerpoint.presentation.macroEnabled.12",
    "ppsx": "application/vnd.openxmlformats-officedocument.presentationml.slideshow",
    "ppsm": "application/vnd.ms-powerpoint.slideshow.macroEnabled.12",
    "potx": "application/vnd.openxmlformats-officedocument.presentationml.template",
    "potm": "application/vnd.ms-powerpoint.template.macroEnabled.12",
    "ppam": "application/vnd.ms-powerpoint.addin.macroEnabled.12",
    "sldx": "application/vnd.openxmlformats-officedocument.presentationml.slide",
    "sldm": "application/vnd.ms-powerpoint.slide.macroEnabled.12",
    "onetoc|onetoc2|onetmp|onepkg": "application/onenote",
    "oxps": "application/oxps",
    "xps": "application/vnd.ms-xpsdocument",
    # OpenOffice formats.
    "odt": "application/vnd.oasis.opendocument.text",
    "odp": "application/vnd.oasis.opendocument.presentation",
    "ods": "application/vnd.oasis.opendocument.spreadsheet",
    "odg": "application/vnd.oasis.opendocument.graphics",
    "odc": "application/vnd.oasis.opendocument.chart",
    "odb": "application/vnd.oasis.opendocument.database",
    "odf": "application/vnd.oasis.opendocument.formula",
    # WordPerfect formats.
    "wp|wpd": "application/wordperfect",
    # iWork formats.
    "key": "application/vnd.apple.keynote",
    "numbers": "application/vnd.apple.numbers",
    "pages": "application/vnd.apple.pages",
}


def mime_types_for(media_type: str) -> list[str]:
    """Return the registered MIME types of a media family (``image``, ``video``...)."""
    prefix = f"{media_type}/"
    return sorted({mime for mime in MIME_TYPES.values() if mime.startswith(prefix)})
