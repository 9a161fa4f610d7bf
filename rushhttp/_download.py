"""Save-path resolution for downloaded resources."""

from __future__ import annotations

import os
import posixpath
from pathlib import Path
from urllib.parse import unquote, urlsplit

DEFAULT_EXTENSION = ".jpg"
DEFAULT_FILENAME = "download"


def extension_from_content_type(content_type: str | None) -> str:
    """Turn a Content-Type value into a file extension.

    "image/png" gives ".png", "image/svg+xml; charset=utf-8" gives
    ".svg+xml". Missing or unparseable values give ".jpg".
    """
    if not content_type:
        return DEFAULT_EXTENSION

    media_type = content_type.split(";", 1)[0].strip()
    _, sep, subtype = media_type.partition("/")
    subtype = subtype.strip().lower()
    if not sep or not subtype:
        return DEFAULT_EXTENSION
    return "." + subtype


def filename_from_url(url: str) -> str:
    """Last path segment of a URL, ignoring query and fragment."""
    name = unquote(posixpath.basename(urlsplit(url).path))
    # Encoded separators must not climb out of the target directory.
    name = name.replace("/", "_").replace(os.sep, "_")
    if name in ("", ".", ".."):
        return DEFAULT_FILENAME
    return name


def resolve_save_path(
    url: str,
    content_type: str | None,
    save_path: str | os.PathLike[str] | None = None,
) -> Path:
    """Work out where a download should be written.

    An explicit save_path is used as-is. Otherwise the file goes into the
    current working directory, named after the URL. The Content-Type
    extension is only added when the name has no suffix, so "y.png" stays
    "y.png" instead of becoming "y.png.png".
    """
    if save_path is not None:
        return Path(save_path)

    name = filename_from_url(url)
    if not Path(name).suffix:
        name += extension_from_content_type(content_type)
    return Path.cwd() / name
