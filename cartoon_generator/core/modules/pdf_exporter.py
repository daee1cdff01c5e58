"""
Export the finished comic panels as a PDF.

Panels are placed in order on a two-column grid of bordered cells. Each
image keeps its aspect ratio and is centred inside its cell.
"""

import logging
from io import BytesIO
from typing import Optional

import httpx
from fpdf import FPDF
from PIL import Image, UnidentifiedImageError

from cartoon_generator.config import PDF_CONSTANTS
from ..errors import MissingInputError, ProviderError

logger = logging.getLogger(__name__)


def load_image(data: bytes) -> Image.Image:
    """Decode image bytes (webp, png, jpeg, gif) into an RGB PIL image."""
    try:
        image = Image.open(BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ProviderError(f"Could not decode image: {e}") from e
    return image.convert("RGB")


def fit_in_cell(
    image_size: tuple[int, int],
    cell_width: float,
    cell_height: float,
) -> tuple[float, float, float, float]:
    """
    Scale an image into a cell, preserving aspect ratio.

    Returns:
        (x_offset, y_offset, width, height) relative to the cell origin
    """
    img_w, img_h = image_size
    scale = min(cell_width / img_w, cell_height / img_h)
    width, height = img_w * scale, img_h * scale
    return (cell_width - width) / 2, (cell_height - height) / 2, width, height


def render_pdf(images: list[Image.Image], layout: Optional[dict] = None) -> bytes:
    """Lay images out on the panel grid and return the PDF bytes."""
    layout = {**PDF_CONSTANTS, **(layout or {})}
    columns, rows = layout["columns"], layout["rows"]
    margin, padding = layout["margin"], layout["cell_padding"]

    pdf = FPDF(orientation=layout["orientation"], unit="mm", format=layout["page_format"])
    pdf.set_auto_page_break(auto=False)
    pdf.set_line_width(layout["border_width"])

    cell_w = (pdf.w - 2 * margin) / columns
    cell_h = (pdf.h - 2 * margin) / rows
    per_page = columns * rows

    for index, image in enumerate(images):
        slot = index % per_page
        if slot == 0:
            pdf.add_page()

        row, col = divmod(slot, columns)
        cell_x = margin + col * cell_w
        cell_y = margin + row * cell_h
        pdf.rect(cell_x, cell_y, cell_w, cell_h)

        dx, dy, w, h = fit_in_cell(image.size, cell_w - 2 * padding, cell_h - 2 * padding)
        pdf.image(image, x=cell_x + padding + dx, y=cell_y + padding + dy, w=w, h=h)

    return bytes(pdf.output())


class PdfExporter:
    """Downloads panel images and renders them into a single PDF."""

    def __init__(self, layout: Optional[dict] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.layout = layout
        self.transport = transport

    async def _download(self, client: httpx.AsyncClient, url: str) -> bytes:
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ProviderError(f"Failed to download image {url}: {e}") from e
        return response.content

    async def export(self, image_urls: list[str]) -> bytes:
        """
        Build a PDF from image URLs, in the order given.

        Raises:
            MissingInputError: If there are no images
            ProviderError: If an image cannot be downloaded or decoded
        """
        if not image_urls:
            raise MissingInputError("No images to export.")

        images = []
        async with httpx.AsyncClient(
            timeout=PDF_CONSTANTS["download_timeout"],
            follow_redirects=True,
            transport=self.transport,
        ) as client:
            for url in image_urls:
                images.append(load_image(await self._download(client, url)))

        pdf_bytes = render_pdf(images, self.layout)
        logger.info(f"Exported {len(images)} panels to PDF ({len(pdf_bytes)} bytes)")
        return pdf_bytes
