"""Unit tests for asset resolution."""

import base64
from unittest.mock import Mock, patch

import pytest
import requests

from scholarcv.contexts.rendering import AssetRef, LocalAssetResolver, ResolvedAsset


@pytest.fixture
def uploads(tmp_path):
    root = tmp_path / "public"
    (root / "uploads").mkdir(parents=True)
    (root / "uploads" / "me.jpg").write_bytes(b"jpeg-bytes")
    (tmp_path / "secret.txt").write_text("top secret")
    return root


@pytest.mark.unit
def test_resolved_asset_data_uri():
    """Test data URI encoding of resolved bytes."""
    asset = ResolvedAsset(filename="a.png", content=b"abc", media_type="image/png")
    assert asset.data_uri() == "data:image/png;base64,YWJj"


@pytest.mark.unit
def test_asset_ref_path():
    """Test that linked assets live under assets/."""
    ref = AssetRef.from_resolved(ResolvedAsset(filename="me.jpg", content=b"x", media_type="image/jpeg"))
    assert ref.path == "assets/me.jpg"


@pytest.mark.unit
def test_resolve_uploads_path(uploads):
    """Test resolving a stored uploads-relative path."""
    resolver = LocalAssetResolver(uploads_root=uploads)
    asset = resolver.resolve("/uploads/me.jpg")

    assert asset.filename == "me.jpg"
    assert asset.content == b"jpeg-bytes"
    assert asset.media_type == "image/jpeg"


@pytest.mark.unit
@pytest.mark.parametrize("reference", ["/uploads/missing.jpg", "../secret.txt", "/uploads/../../secret.txt", "", None])
def test_resolve_rejects_missing_and_escaping_paths(uploads, reference):
    """Test that missing files and paths outside the uploads root give None."""
    resolver = LocalAssetResolver(uploads_root=uploads)
    assert resolver.resolve(reference) is None


@pytest.mark.unit
def test_resolve_data_uri():
    """Test decoding an inline data URI."""
    encoded = base64.b64encode(b"png-bytes").decode("ascii")
    asset = LocalAssetResolver().resolve(f"data:image/png;base64,{encoded}")

    assert asset.content == b"png-bytes"
    assert asset.media_type == "image/png"
    assert asset.filename == "photo.png"


@pytest.mark.unit
@pytest.mark.parametrize("reference", ["data:nonsense", "data:image/png;base64,***"])
def test_resolve_malformed_data_uri(reference):
    """Test that malformed data URIs give None."""
    assert LocalAssetResolver().resolve(reference) is None


@pytest.mark.unit
def test_resolve_remote_url():
    """Test fetching a remote photo through the session."""
    session = Mock()
    session.get.return_value = Mock(content=b"remote", headers={"Content-Type": "image/jpeg; charset=binary"})
    resolver = LocalAssetResolver(session=session, timeout=3)

    asset = resolver.resolve("https://cdn.example.com/people/ada%20photo.jpg")

    session.get.assert_called_once_with("https://cdn.example.com/people/ada%20photo.jpg", timeout=3)
    assert asset.content == b"remote"
    assert asset.media_type == "image/jpeg"
    assert asset.filename == "ada_photo.jpg"


@pytest.mark.unit
def test_resolve_remote_failure_gives_none():
    """Test that network errors and HTTP errors give None."""
    session = Mock()
    session.get.side_effect = requests.ConnectionError("down")
    assert LocalAssetResolver(session=session).resolve("https://cdn.example.com/me.jpg") is None

    response = Mock()
    response.raise_for_status.side_effect = requests.HTTPError("404")
    session = Mock()
    session.get.return_value = response
    assert LocalAssetResolver(session=session).resolve("http://cdn.example.com/me.jpg") is None


@pytest.mark.unit
def test_resolve_remote_without_session_uses_requests_get():
    """Test that a resolver built without a session fetches with requests.get."""
    response = Mock(content=b"remote", headers={"Content-Type": "image/png"})
    resolver = LocalAssetResolver(timeout=2)

    assert resolver.session is None
    with patch("scholarcv.contexts.rendering.assets.requests.get", return_value=response) as get:
        asset = resolver.resolve("https://cdn.example.com/me.png")

    get.assert_called_once_with("https://cdn.example.com/me.png", timeout=2)
    assert asset.content == b"remote"
    assert asset.filename == "me.png"
