"""
PDF export constants for the Cartoon Generator.

Comic panels are laid out on A4 portrait pages, two per row.
"""

# PDF layout constants (millimetres)
PDF_CONSTANTS = {
    "page_format": "A4",
    "orientation": "P",
    "margin": 10,
    "columns": 2,
    "rows": 3,  # 6 panels per page, one full strip
    "cell_padding": 4,
    "border_width": 0.5,
    "download_timeout": 30,
}
