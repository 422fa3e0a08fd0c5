"""
Offline HTML archive export.

The archive holds index.html plus every asset the markup links to under
assets/. Entries carry a fixed timestamp so identical renders give identical
archives.
"""

import io
import zipfile

from scholarcv.contexts.rendering import RenderedOutput

INDEX_FILENAME = "index.html"

# Earliest timestamp the zip format can store
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)


def _write(archive: zipfile.ZipFile, name: str, content: bytes) -> None:
    info = zipfile.ZipInfo(name, date_time=ZIP_EPOCH)
    info.compress_type = zipfile.ZIP_DEFLATED
    info.external_attr = 0o644 << 16
    archive.writestr(info, content)


def build_html_bundle(output: RenderedOutput) -> bytes:
    """
    Package rendered markup and its linked assets as a zip archive.

    Args:
        output: Render made with embed_assets=False

    Returns:
        Zip archive bytes: index.html, then assets/<filename> per asset
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        _write(archive, INDEX_FILENAME, output.markup.encode("utf-8"))
        written = set()
        for asset in output.assets:
            if asset.path in written:
                continue
            written.add(asset.path)
            _write(archive, asset.path, asset.content)
    return buffer.getvalue()
