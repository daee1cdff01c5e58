"""Unit tests for the PDF exporter."""

import re
from io import BytesIO

import httpx
import pytest
from PIL import Image

from cartoon_generator.core.errors import MissingInputError, ProviderError
from cartoon_generator.core.modules.pdf_exporter import (
    PdfExporter,
    fit_in_cell,
    load_image,
    render_pdf,
)


def image_bytes(fmt: str = "PNG", size=(64, 48), color=(200, 50, 50)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


def count_pages(pdf: bytes) -> int:
    return len(re.findall(rb"/Type\s*/Page\b", pdf))


class TestFitInCell:

    def test_wide_image_fills_width(self):
        dx, dy, w, h = fit_in_cell((200, 100), 100, 100)

        assert (w, h) == (100, 50)
        assert (dx, dy) == (0, 25)

    def test_tall_image_fills_height(self):
        dx, dy, w, h = fit_in_cell((100, 400), 80, 100)

        assert (w, h) == (25, 100)
        assert dx == pytest.approx(27.5)
        assert dy == 0

    def test_upscales_small_images(self):
        _, _, w, h = fit_in_cell((10, 10), 50, 50)

        assert (w, h) == (50, 50)


class TestLoadImage:

    @pytest.mark.parametrize("fmt", ["PNG", "JPEG", "WEBP", "GIF"])
    def test_decodes_to_rgb(self, fmt):
        image = load_image(image_bytes(fmt))

        assert image.mode == "RGB"
        assert image.size == (64, 48)

    def test_garbage_is_provider_error(self):
        with pytest.raises(ProviderError, match="Could not decode image"):
            load_image(b"not an image")


class TestRenderPdf:

    def test_six_panels_fit_one_page(self):
        images = [load_image(image_bytes()) for _ in range(6)]

        pdf = render_pdf(images)

        assert pdf.startswith(b"%PDF")
        assert count_pages(pdf) == 1

    def test_seventh_panel_starts_new_page(self):
        images = [load_image(image_bytes()) for _ in range(7)]

        assert count_pages(render_pdf(images)) == 2

    def test_layout_override(self):
        images = [load_image(image_bytes()) for _ in range(4)]

        assert count_pages(render_pdf(images, {"columns": 1, "rows": 2})) == 2


class TestPdfExporter:

    @pytest.mark.asyncio
    async def test_downloads_in_order(self):
        requested = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return httpx.Response(200, content=image_bytes("WEBP"))

        urls = [f"https://img.test/{i}.webp" for i in range(3)]
        exporter = PdfExporter(transport=httpx.MockTransport(handler))

        pdf = await exporter.export(urls)

        assert requested == urls
        assert pdf.startswith(b"%PDF")
        assert count_pages(pdf) == 1

    @pytest.mark.asyncio
    async def test_no_images(self):
        with pytest.raises(MissingInputError):
            await PdfExporter().export([])

    @pytest.mark.asyncio
    async def test_download_failure(self):
        def handler(request):
            return httpx.Response(404)

        exporter = PdfExporter(transport=httpx.MockTransport(handler))

        with pytest.raises(ProviderError, match="Failed to download image"):
            await exporter.export(["https://img.test/missing.webp"])

    @pytest.mark.asyncio
    async def test_undecodable_download(self):
        def handler(request):
            return httpx.Response(200, content=b"<html>expired</html>")

        exporter = PdfExporter(transport=httpx.MockTransport(handler))

        with pytest.raises(ProviderError, match="Could not decode"):
            await exporter.export(["https://img.test/1.webp"])
