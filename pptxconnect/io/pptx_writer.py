"""
PowerPoint output module

Generates PowerPoint slides from the intermediate element model using
python-pptx + lxml. Routed elbow connectors are written as one straight
connector per segment, glued to their shapes at the first and last segment.
"""
import io
from typing import Dict, List, Optional, Tuple

from lxml import etree as ET
from pptx import Presentation  # type: ignore[import]
from pptx.dml.color import RGBColor  # type: ignore[import]
from pptx.enum.shapes import MSO_CONNECTOR, MSO_SHAPE  # type: ignore[import]

from ..config import RoutingConfig, default_config
from ..geom.path import segments_from_points
from ..geom.units import px_to_emu, px_to_pt
from ..logger import RoutingLogger
from ..mapping.shape_map import map_connector_type_to_pptx, map_shape_type_to_pptx, site_to_connection_index
from ..model.intermediate import (
    BaseElement,
    ConnectorElement,
    GroupElement,
    ImageElement,
    ShapeElement,
    TextElement,
)
from ..shapes.catalog import ShapeKind, get_preset

# XML namespaces
NS_DRAWINGML = 'http://schemas.openxmlformats.org/drawingml/2006/main'
NS_PRESENTATIONML = 'http://schemas.openxmlformats.org/presentationml/2006/main'
NSMAP_DRAWINGML = {'a': NS_DRAWINGML}
NSMAP_BOTH = {'p': NS_PRESENTATIONML, 'a': NS_DRAWINGML}

# Adjust values in a:avLst are stored in 1/100000 units; python-pptx normalizes them to 1.0
_ADJUST_SCALE = 100000.0


def _a(tag_name: str) -> str:
    """Create DrawingML namespace-qualified tag name"""
    return f'{{{NS_DRAWINGML}}}{tag_name}'


class PPTXWriter:
    """PowerPoint presentation writer"""

    def __init__(self, logger: Optional[RoutingLogger] = None, config: Optional[RoutingConfig] = None):
        """
        Args:
            logger: RoutingLogger instance
            config: RoutingConfig instance (uses default_config if None)
        """
        self.config = config or default_config
        self.logger = logger
        # Element id -> written shape (per slide), used to glue connectors
        self._written: Dict[str, object] = {}
        self._kinds: Dict[str, str] = {}

    def _set_shape_name(self, shape_obj, name: Optional[str]) -> None:
        """Set debug name on a shape/connector/textbox; log on failure."""
        if not name:
            return
        try:
            shape_obj.name = name
        except Exception as e:
            if self.logger:
                self.logger.debug(f"Failed to set shape name: {e}")

    def create_presentation(self, page_size: Optional[Tuple[float, float]] = None) -> Tuple[Presentation, object]:
        """
        Create presentation and blank layout.

        Args:
            page_size: (width, height) tuple (px), or None

        Returns:
            Tuple of (Presentation, blank layout).
        """
        prs = Presentation()

        # Get blank layout
        blank_layout_index = 6
        try:
            blank_layout = prs.slide_layouts[blank_layout_index]
        except Exception:
            blank_layout = prs.slide_layouts[0]

        # Set slide size
        if page_size and page_size[0] and page_size[1]:
            try:
                prs.slide_width = px_to_emu(page_size[0])
                prs.slide_height = px_to_emu(page_size[1])
            except Exception as e:
                if self.logger:
                    self.logger.debug(f"Failed to set slide size: {e}")

        return prs, blank_layout

    def add_slide(self, prs: Presentation, blank_layout, elements: List[BaseElement]):
        """
        Add elements to a new slide

        Args:
            prs: Presentation object
            blank_layout: Blank layout
            elements: List of elements (stacking order; later elements are on top)

        Returns:
            The new slide
        """
        slide = prs.slides.add_slide(blank_layout)
        self._written = {}
        self._kinds = {}

        # Connectors are glued by shape id, so every shape is written before
        # any connector (connectors end up on top).
        for element in elements:
            if not isinstance(element, ConnectorElement):
                self._add_element(slide.shapes, element, 0.0, 0.0)
        for element in elements:
            if isinstance(element, ConnectorElement):
                self._add_connector(slide.shapes, element, 0.0, 0.0)
        return slide

    def _add_element(self, shapes, element: BaseElement, origin_x: float, origin_y: float):
        if isinstance(element, GroupElement):
            return self._add_group(shapes, element, origin_x, origin_y)
        if isinstance(element, ShapeElement):
            return self._add_shape(shapes, element, origin_x, origin_y)
        if isinstance(element, TextElement):
            return self._add_text(shapes, element, origin_x, origin_y)
        if isinstance(element, ImageElement):
            return self._add_image(shapes, element, origin_x, origin_y)
        if self.logger:
            self.logger.debug(f"Skipping element {element.id} of type {element.element_type}")
        return None

    def _remember(self, element: BaseElement, shape_obj) -> None:
        self._written[element.id] = shape_obj
        # Pictures, text boxes and groups carry the rectangle connection sites
        self._kinds[element.id] = element.shape_type if isinstance(element, ShapeElement) else ShapeKind.RECTANGLE.value

    # ---- Shapes ----

    def _add_group(self, shapes, group: GroupElement, origin_x: float, origin_y: float):
        """Add group; children are positioned relative to the group origin"""
        grp = shapes.add_group_shape()
        self._set_shape_name(grp, f"pptxconnect:group:{group.id}" if group.id else None)
        child_x = origin_x + float(group.x or 0.0)
        child_y = origin_y + float(group.y or 0.0)
        for child in group.children:
            if isinstance(child, ConnectorElement):
                continue
            self._add_element(grp.shapes, child, child_x, child_y)
        for child in group.children:
            if isinstance(child, ConnectorElement):
                self._add_connector(grp.shapes, child, child_x, child_y)
        self._remember(group, grp)
        return grp

    def _add_shape(self, shapes, shape: ShapeElement, origin_x: float, origin_y: float):
        """Add shape"""
        if not shape.w or not shape.h or shape.w <= 0 or shape.h <= 0:
            return None

        kind = ShapeKind.parse(shape.shape_type)
        if kind == ShapeKind.UNKNOWN and self.logger:
            self.logger.debug(f"Shape {shape.id}: {shape.shape_type!r} written as rectangle")

        shp = shapes.add_shape(
            map_shape_type_to_pptx(kind),
            px_to_emu(origin_x + shape.x), px_to_emu(origin_y + shape.y),
            px_to_emu(shape.w), px_to_emu(shape.h),
        )
        self._set_shape_name(shp, f"pptxconnect:shape:{shape.id}" if shape.id else None)
        self._apply_shape_adjustments(shp, shape, kind)

        if shape.text:
            try:
                shp.text_frame.text = shape.text
            except Exception as e:
                if self.logger:
                    self.logger.debug(f"Failed to set shape text: {e}")

        if shape.style.fill:
            try:
                shp.fill.solid()
                shp.fill.fore_color.rgb = shape.style.fill
            except Exception as e:
                if self.logger:
                    self.logger.debug(f"Failed to set fill color: {e}")
        if shape.style.stroke:
            try:
                shp.line.fill.solid()
                self._set_stroke_color_xml(shp, shape.style.stroke)
            except Exception as e:
                if self.logger:
                    self.logger.debug(f"Failed to set stroke color: {e}")
        if shape.style.stroke_width > 0:
            try:
                shp.line.width = px_to_pt(shape.style.stroke_width)
            except Exception as e:
                if self.logger:
                    self.logger.debug(f"Failed to set stroke width: {e}")

        self._remember(shape, shp)
        return shp

    def _apply_shape_adjustments(self, shp, shape: ShapeElement, kind: ShapeKind) -> None:
        """Write adjust values for presets that have them (e.g. triangle apex, parallelogram skew)."""
        if not shape.adjustments:
            return
        names = [name for name, _ in get_preset(kind).adjust_defaults]
        for index, name in enumerate(names):
            if name not in shape.adjustments:
                continue
            try:
                if index < len(shp.adjustments):
                    shp.adjustments[index] = float(shape.adjustments[name]) / _ADJUST_SCALE
            except Exception as e:
                if self.logger:
                    self.logger.debug(f"Failed to set adjustment {name}: {e}")

    def _add_text(self, shapes, text_element: TextElement, origin_x: float, origin_y: float):
        """Add standalone text element."""
        if not text_element.w or not text_element.h or text_element.w <= 0 or text_element.h <= 0:
            return None
        tb = shapes.add_textbox(
            px_to_emu(origin_x + text_element.x), px_to_emu(origin_y + text_element.y),
            px_to_emu(text_element.w), px_to_emu(text_element.h),
        )
        self._set_shape_name(tb, f"pptxconnect:text:{text_element.id}" if text_element.id else None)
        if text_element.text:
            tb.text_frame.text = text_element.text
        self._remember(text_element, tb)
        return tb

    def _add_image(self, shapes, image: ImageElement, origin_x: float, origin_y: float):
        """Add picture; images without data are written as an empty frame"""
        if not image.w or not image.h:
            return None
        left, top = px_to_emu(origin_x + image.x), px_to_emu(origin_y + image.y)
        width, height = px_to_emu(image.w), px_to_emu(image.h)
        if image.blob:
            try:
                pic = shapes.add_picture(io.BytesIO(image.blob), left, top, width, height)
                self._set_shape_name(pic, f"pptxconnect:image:{image.id}" if image.id else None)
                self._remember(image, pic)
                return pic
            except Exception as e:
                if self.logger:
                    self.logger.warning(f"Failed to add image {image.id}: {e}")
        frame = shapes.add_shape(MSO_SHAPE.RECTANGLE, left, top, width, height)
        self._set_shape_name(frame, f"pptxconnect:image:{image.id}" if image.id else None)
        try:
            frame.fill.background()
        except Exception as e:
            if self.logger:
                self.logger.debug(f"Failed to clear image frame fill: {e}")
        self._remember(image, frame)
        return frame

    # ---- Connectors ----

    def _add_connector(self, shapes, connector: ConnectorElement, origin_x: float, origin_y: float):
        """Add connector: routed elbow connectors per segment, others as a single connector"""
        if not connector.points or len(connector.points) < 2:
            return None
        if connector.is_elbow and len(connector.points) > 2:
            return self._add_orthogonal_connector(shapes, connector, origin_x, origin_y)

        begin, end = connector.points[0], connector.points[-1]
        line = shapes.add_connector(
            map_connector_type_to_pptx(connector.connector_type),
            px_to_emu(origin_x + begin.x), px_to_emu(origin_y + begin.y),
            px_to_emu(origin_x + end.x), px_to_emu(origin_y + end.y),
        )
        self._set_shape_name(line, f"pptxconnect:connector:{connector.id}" if connector.id else None)
        self._apply_connector_line_style(line, connector, connector.style.arrow_start, connector.style.arrow_end)
        self._glue(line, 'stCxn', connector.source_id, connector.start_site_name)
        self._glue(line, 'endCxn', connector.target_id, connector.end_site_name)
        return line

    def _add_orthogonal_connector(self, shapes, connector: ConnectorElement, origin_x: float, origin_y: float):
        """Add polyline as straight connectors for each segment"""
        segments = segments_from_points(connector.points)
        created_shapes = []

        for idx, segment in enumerate(segments):
            try:
                conn_shape = shapes.add_connector(
                    MSO_CONNECTOR.STRAIGHT,
                    px_to_emu(origin_x + segment.start.x), px_to_emu(origin_y + segment.start.y),
                    px_to_emu(origin_x + segment.end.x), px_to_emu(origin_y + segment.end.y),
                )
                self._set_shape_name(
                    conn_shape, f"pptxconnect:connector:{connector.id}:seg:{idx}" if connector.id else None,
                )

                is_first_segment = idx == 0
                is_last_segment = idx == len(segments) - 1
                self._apply_connector_line_style(
                    conn_shape, connector,
                    connector.style.arrow_start if is_first_segment else None,
                    connector.style.arrow_end if is_last_segment else None,
                )
                if is_first_segment:
                    self._glue(conn_shape, 'stCxn', connector.source_id, connector.start_site_name)
                if is_last_segment:
                    self._glue(conn_shape, 'endCxn', connector.target_id, connector.end_site_name)

                created_shapes.append(conn_shape)
            except Exception as e:
                if self.logger:
                    self.logger.warning(f"Failed to create connector segment {idx}: {e}")
                continue

        return created_shapes[0] if created_shapes else None

    def _apply_connector_line_style(
        self,
        line_shape,
        connector: ConnectorElement,
        start_arrow: Optional[str],
        end_arrow: Optional[str],
    ) -> None:
        """Apply stroke, width and arrows to a connector shape."""
        style = connector.style
        stroke_color = style.stroke if style.stroke else RGBColor(0, 0, 0)
        try:
            line_shape.line.fill.solid()
            self._set_stroke_color_xml(line_shape, stroke_color)
        except Exception as e:
            if self.logger:
                self.logger.debug(f"Failed to set connector stroke color: {e}")
        if style.stroke_width > 0:
            try:
                line_shape.line.width = px_to_pt(style.stroke_width)
            except Exception as e:
                if self.logger:
                    self.logger.debug(f"Failed to set connector stroke width: {e}")
        if start_arrow or end_arrow:
            self._set_arrow_heads_xml(line_shape, start_arrow, end_arrow)

    def _glue(self, line_shape, tag: str, element_id: Optional[str], site_name: Optional[str]) -> None:
        """Attach a connector end to a written shape when the site has a preset connection index"""
        if not element_id:
            return
        target = self._written.get(element_id)
        index = site_to_connection_index(self._kinds.get(element_id), site_name)
        if target is None or index is None:
            if self.logger:
                self.logger.debug(f"Connector end {tag} not glued to {element_id} (site {site_name!r})")
            return
        self._set_connection_xml(line_shape, tag, target.shape_id, index)

    # ---- XML helpers ----

    def _set_connection_xml(self, shape, tag: str, shape_id: int, index: int) -> None:
        """Set a:stCxn / a:endCxn via XML without moving the connector end"""
        try:
            c_nv = shape._element.find('.//p:cNvCxnSpPr', namespaces=NSMAP_BOTH)
            if c_nv is None:
                return
            for existing in c_nv.findall(f'a:{tag}', namespaces=NSMAP_DRAWINGML):
                c_nv.remove(existing)
            cxn = ET.SubElement(c_nv, _a(tag))
            cxn.set('id', str(shape_id))
            cxn.set('idx', str(index))
            # Schema order: stCxn before endCxn
            if tag == 'stCxn':
                end_cxn = c_nv.find('a:endCxn', namespaces=NSMAP_DRAWINGML)
                if end_cxn is not None:
                    end_cxn.addprevious(cxn)
        except Exception as e:
            if self.logger:
                self.logger.debug(f"Failed to set connection XML: {e}")

    def _line_element(self, shape):
        shape_element = shape._element
        ln_element = shape_element.find('.//a:ln', namespaces=NSMAP_DRAWINGML)
        if ln_element is None:
            sp_pr = shape_element.find('.//p:spPr', namespaces=NSMAP_BOTH)
            if sp_pr is None:
                return None
            ln_element = ET.SubElement(sp_pr, _a('ln'))
        return ln_element

    def _set_stroke_color_xml(self, shape, stroke_color: RGBColor):
        """Set stroke color via XML"""
        try:
            if not hasattr(shape, '_element'):
                return
            ln_element = self._line_element(shape)
            if ln_element is None:
                return

            solid_fill = ln_element.find('a:solidFill', namespaces=NSMAP_DRAWINGML)
            if solid_fill is None:
                no_fill = ln_element.find('a:noFill', namespaces=NSMAP_DRAWINGML)
                if no_fill is not None:
                    ln_element.remove(no_fill)
                solid_fill = ET.Element(_a('solidFill'))
                # Fill comes before dash and line ends in a:ln
                ln_element.insert(0, solid_fill)

            for color_elem in list(solid_fill):
                solid_fill.remove(color_elem)

            srgb = ET.SubElement(solid_fill, _a('srgbClr'))
            srgb.set('val', str(stroke_color))
        except Exception as e:
            if self.logger:
                self.logger.debug(f"Failed to set stroke color XML: {e}")

    def _set_arrow_heads_xml(self, shape, start_arrow: Optional[str], end_arrow: Optional[str]):
        """Set arrows via XML

        Notes:
            a:headEnd is the line beginning and a:tailEnd the line end (arrow tip).
            Both are empty elements; PowerPoint uses the line formatting for color.
        """
        try:
            if not hasattr(shape, '_element'):
                return
            ln_element = self._line_element(shape)
            if ln_element is None:
                return

            for head_end in ln_element.findall('a:headEnd', namespaces=NSMAP_DRAWINGML):
                ln_element.remove(head_end)
            for tail_end in ln_element.findall('a:tailEnd', namespaces=NSMAP_DRAWINGML):
                ln_element.remove(tail_end)

            if start_arrow:
                head_end = ET.SubElement(ln_element, _a('headEnd'))
                head_end.set('type', start_arrow)
                head_end.set('w', 'med')
                head_end.set('len', 'med')
            if end_arrow:
                tail_end = ET.SubElement(ln_element, _a('tailEnd'))
                tail_end.set('type', end_arrow)
                tail_end.set('w', 'med')
                tail_end.set('len', 'med')
        except Exception as e:
            if self.logger:
                self.logger.debug(f"Failed to set arrow XML: {e}")
