"""
Title block for building drawings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from .constants import BORDER_COLOR, BORDER_WIDTH, THIN_LINE_WIDTH
from .svg import fmt, line, rect, text
from .view_area import ViewArea

if TYPE_CHECKING:
    from ..configuration import BuildingConfiguration, Catalog

BRAND_COLOR = "#2C5530"


@dataclass
class TitleBlockInfo:
    """Information displayed in the title block."""
    title: str = "Garden Building"
    customer_name: str = ""
    address: str = ""
    use_case: str = ""
    specification: list[str] = field(default_factory=list)
    internal_dimensions: str = ""
    drawn_date: str = ""
    scale_text: str = "1:50 @ A3"
    drawing_number: str = "GOB-001"
    # Company branding
    company_name: str = "GARDEN OFFICE BUILDINGS"
    footer: str = "To scale. Drawing not 100% accurate"

    @classmethod
    def from_configuration(cls, configuration: "BuildingConfiguration",
                           catalog: "Catalog", today: date | None = None) -> "TitleBlockInfo":
        """
        Summarise a configuration for the title block.

        The customer's date wins; otherwise ``today`` is shown as month and
        year, and the date is left blank when neither is given.
        """
        cfg = configuration
        customer = cfg.customer
        tier = "Signature" if cfg.is_signature else "Classic"
        spec = [
            f"{cfg.width / 1000:.1f}m x {cfg.depth / 1000:.1f}m x {cfg.height / 1000:.1f}m",
            f"{tier} Range",
            f"{catalog.cladding_label(cfg.cladding.front)} front cladding",
        ]
        if cfg.has_canopy:
            spec.append("Integrated canopy" + (" and decking" if cfg.has_decking else ""))

        w, d, h = catalog.internal_reductions.internal_dimensions(
            cfg.width, cfg.depth, cfg.height, cfg.tier
        )
        internal = f"Internal: {fmt(w)} x {fmt(d)} x {fmt(h)}mm"

        return cls(
            title=customer.title,
            customer_name=customer.name,
            address=customer.address,
            use_case=customer.use_case,
            specification=spec,
            internal_dimensions=internal,
            drawn_date=customer.date or (today.strftime("%B %Y") if today else ""),
            drawing_number=customer.drawing_number,
        )


@dataclass
class TitleBlock:
    """
    Generates the drawing title block.

    Drawn in its own local mm with the top-left corner at (0, 0); the
    composer places it to the right of the plan view.

    Layout (fractions of the block height):
        header band      company name
        customer band    "Proposed ... for:", client, site address, primary use
        spec band        specification summary and internal dimensions
        metadata row     date | scale | drawing number
        footer           disclaimer
    """
    info: TitleBlockInfo = field(default_factory=TitleBlockInfo)
    width: float = 4000
    height: float = 2800
    area: ViewArea = field(init=False)

    def __post_init__(self):
        self.area = ViewArea(x=0, y=0, width=self.width, height=self.height)

    def _generate_metadata_row(self, row_y: float, row_height: float) -> list[str]:
        """Generate equally-spaced metadata columns with vertical dividers."""
        info = self.info
        items = [
            ("Date", info.drawn_date, "title-date"),
            ("Scale", info.scale_text, "title-scale"),
            ("Drawing No.", info.drawing_number, "title-drawing-number"),
        ]
        col_width = self.width / len(items)
        font = row_height * 0.32
        parts = []
        for i, (label, value, cls) in enumerate(items):
            col_x = i * col_width
            if i > 0:
                parts.append(line(col_x, row_y, col_x, row_y + row_height,
                                  stroke=BORDER_COLOR, stroke_width=THIN_LINE_WIDTH))
            parts.append(text(col_x + col_width / 2, row_y + row_height * 0.42, label, font * 0.8,
                              fill="#666666"))
            parts.append(text(col_x + col_width / 2, row_y + row_height * 0.82, value or "", font,
                              fill="#000000", bold=True, class_=cls))
        return parts

    def generate_svg(self) -> str:
        """Generate SVG content for the title block."""
        info = self.info
        w, h = self.width, self.height
        cx = w / 2
        pad = w * 0.03

        header_h = h * 0.14
        customer_h = h * 0.36
        spec_h = h * 0.28
        meta_h = h * 0.13
        customer_y = header_h
        spec_y = customer_y + customer_h
        meta_y = spec_y + spec_h
        footer_y = meta_y + meta_h

        base = h / 28
        parts = [
            '<g id="title-block">',
            rect(0, 0, w, h, fill="#FFFFFF", stroke=BORDER_COLOR, stroke_width=BORDER_WIDTH * 2),
            text(cx, header_h * 0.62, info.company_name, base * 1.6, fill=BRAND_COLOR, bold=True,
                 class_="title-company"),
        ]
        for y in (customer_y, spec_y, meta_y, footer_y):
            parts.append(line(pad, y, w - pad, y, stroke=BORDER_COLOR, stroke_width=THIN_LINE_WIDTH))

        # Customer band
        rows = [
            (f"Proposed {info.title} for:", base * 1.15, True, "title-project"),
            (info.customer_name or "[Customer Name]", base * 1.1, False, "title-client"),
            (f"@ {info.address}" if info.address else "[Site Address]", base, False, "title-address"),
        ]
        if info.use_case:
            rows.append((f"Primary use: {info.use_case}", base * 0.9, False, "title-use"))
        step = customer_h / (len(rows) + 1)
        for i, (content, size, bold, cls) in enumerate(rows, start=1):
            parts.append(text(cx, customer_y + step * i + size * 0.35, content, size,
                              fill="#000000", bold=bold, class_=cls))

        # Specification band
        spec_lines = list(info.specification)
        if info.internal_dimensions:
            spec_lines.append(info.internal_dimensions)
        if spec_lines:
            step = spec_h / (len(spec_lines) + 1)
            for i, content in enumerate(spec_lines, start=1):
                parts.append(text(cx, spec_y + step * i + base * 0.3, content, base * 0.85,
                                  fill="#444444", class_="title-spec"))

        parts.extend(self._generate_metadata_row(meta_y, meta_h))
        parts.append(text(cx, footer_y + (h - footer_y) * 0.6, info.footer, base * 0.75,
                          fill="#888888", italic=True, class_="title-footer"))
        parts.append("</g>")
        return "\n".join(parts)

