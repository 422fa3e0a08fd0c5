"""
Asset resolution for CV renders.

The renderer never touches the filesystem or network itself; it asks an
AssetResolver for the bytes behind a stored reference (the profile photo).
A resolver returns None for anything it cannot fetch, and the renderer then
simply omits the asset.
"""

import base64
import mimetypes
import os
import re
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional, Protocol
from urllib.parse import unquote, urlparse

import requests
from dotenv import load_dotenv

from scholarcv.contexts.rendering.logger import _log_debug
from scholarcv.utils.text_processing import sanitize_filename

load_dotenv()
UPLOADS_PATH = Path(os.getenv("UPLOADS_PATH", "public"))
ASSET_FETCH_TIMEOUT = float(os.getenv("ASSET_FETCH_TIMEOUT", "10"))

DATA_URI = re.compile(r"^data:(?P<media_type>[\w.+-]+/[\w.+-]+)?(?P<base64>;base64)?,(?P<data>.*)$", re.DOTALL)

ASSETS_DIR = "assets"


@dataclass(frozen=True)
class ResolvedAsset:
    """Bytes behind an asset reference."""

    filename: str
    content: bytes
    media_type: str = "application/octet-stream"

    def data_uri(self) -> str:
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.media_type};base64,{encoded}"


@dataclass(frozen=True)
class AssetRef:
    """An asset the markup links to by relative path (e.g. assets/photo.jpg)."""

    path: str
    content: bytes
    media_type: str

    @classmethod
    def from_resolved(cls, asset: ResolvedAsset) -> "AssetRef":
        return cls(path=f"{ASSETS_DIR}/{asset.filename}", content=asset.content, media_type=asset.media_type)


class AssetResolver(Protocol):
    def resolve(self, reference: str) -> Optional[ResolvedAsset]:
        ...


def _filename_for(path: str, media_type: str) -> str:
    name = sanitize_filename(PurePosixPath(unquote(path)).name, fallback="photo")
    if not PurePosixPath(name).suffix:
        name += mimetypes.guess_extension(media_type) or ""
    return name


class LocalAssetResolver:
    """
    Resolve stored photo references.

    - data: URIs are decoded in place
    - http(s) URLs are fetched with requests
    - anything else is a path relative to the uploads root (e.g. "/uploads/abc.jpg"),
      never allowed to escape it
    """

    def __init__(self, uploads_root: Path = None, timeout: float = None, session: requests.Session = None):
        self.uploads_root = Path(uploads_root if uploads_root is not None else UPLOADS_PATH)
        self.timeout = timeout if timeout is not None else ASSET_FETCH_TIMEOUT
        # No session: each fetch is a plain requests.get
        self.session = session

    def resolve(self, reference: str) -> Optional[ResolvedAsset]:
        """
        Fetch the bytes behind a stored reference.

        Args:
            reference: data: URI, http(s) URL, or uploads-relative path

        Returns:
            ResolvedAsset, or None when the reference is empty or unreadable
        """
        if not reference:
            return None
        try:
            if reference.startswith("data:"):
                return self._from_data_uri(reference)
            if reference.startswith(("http://", "https://")):
                return self._from_url(reference)
            return self._from_uploads(reference)
        except (requests.RequestException, OSError, ValueError) as e:
            _log_debug(f"Could not resolve asset '{reference[:80]}': {e}")
            return None

    def _from_data_uri(self, reference: str) -> Optional[ResolvedAsset]:
        match = DATA_URI.match(reference)
        if not match:
            raise ValueError("malformed data URI")
        media_type = match.group("media_type") or "application/octet-stream"
        data = match.group("data")
        content = base64.b64decode(data, validate=True) if match.group("base64") else unquote(data).encode()
        return ResolvedAsset(filename=_filename_for("photo", media_type), content=content, media_type=media_type)

    def _from_url(self, reference: str) -> ResolvedAsset:
        get = self.session.get if self.session is not None else requests.get
        response = get(reference, timeout=self.timeout)
        response.raise_for_status()
        media_type = response.headers.get("Content-Type", "").split(";")[0].strip()
        path = urlparse(reference).path
        if not media_type:
            media_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
        return ResolvedAsset(filename=_filename_for(path, media_type), content=response.content, media_type=media_type)

    def _from_uploads(self, reference: str) -> Optional[ResolvedAsset]:
        root = self.uploads_root.resolve()
        candidate = (root / unquote(reference).lstrip("/")).resolve()
        if root != candidate and root not in candidate.parents:
            raise ValueError("path escapes uploads root")
        if not candidate.is_file():
            _log_debug(f"Asset not found: {candidate}")
            return None
        media_type = mimetypes.guess_type(candidate.name)[0] or "application/octet-stream"
        return ResolvedAsset(
            filename=_filename_for(candidate.name, media_type),
            content=candidate.read_bytes(),
            media_type=media_type,
        )
