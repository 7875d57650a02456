"""
PowerPoint input module

Reads slides of a .pptx file into the intermediate element model using
python-pptx, with lxml XPath for the parts python-pptx does not expose
(preset geometry names, adjust values, connector attachments, line ends)
"""
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from pptx import Presentation  # type: ignore[import]
from pptx.dml.color import RGBColor  # type: ignore[import]
from pptx.enum.shapes import MSO_SHAPE_TYPE  # type: ignore[import]
from pptx.shapes.connector import Connector  # type: ignore[import]

from ..config import RoutingConfig, default_config
from ..geom.primitives import Point
from ..geom.units import emu_to_px
from ..logger import RoutingLogger
from ..mapping.shape_map import connection_index_to_site, map_connector_prst, map_prst_to_shape_kind
from ..model.intermediate import (
    BaseElement,
    ConnectorElement,
    GroupElement,
    ImageElement,
    ShapeElement,
    Style,
    TextElement,
)
from ..shapes.catalog import ShapeKind

# Adjust values are stored as "val N" formulas in a:avLst
_ADJUST_PREFIX = 'val '

# (scale_x, scale_y, offset_x, offset_y) mapping a group's child coordinates to px
_ChildTransform = Tuple[float, float, float, float]
_IDENTITY: _ChildTransform = (1.0, 1.0, 0.0, 0.0)


def _first(values: list) -> Optional[str]:
    return str(values[0]) if values else None


def _site_kind(element: BaseElement) -> str:
    """Kind whose connection site indices apply to an element (non-shapes use the rectangle sites)"""
    if isinstance(element, ShapeElement):
        return element.shape_type
    return ShapeKind.RECTANGLE.value


class PPTXLoader:
    """PowerPoint file loading and parsing"""

    def __init__(self, logger: Optional[RoutingLogger] = None, config: Optional[RoutingConfig] = None):
        """
        Args:
            logger: RoutingLogger instance
            config: RoutingConfig instance (uses default_config if None)
        """
        self.config = config or default_config
        self.logger = logger
        self.presentation = None

    def load_file(self, path: Union[str, Path]) -> List[List[BaseElement]]:
        """
        Load a .pptx file and extract every slide

        Args:
            path: File path

        Returns:
            One element list per slide, in slide order
        """
        self.presentation = Presentation(str(path))
        return [self.extract_elements(slide) for slide in self.presentation.slides]

    def extract_slide_size(self, prs=None) -> Tuple[Optional[float], Optional[float]]:
        """
        Extract slide size

        Returns:
            (width, height) tuple (px), or (None, None)
        """
        prs = prs or self.presentation
        if prs is None or not prs.slide_width or not prs.slide_height:
            return (None, None)
        return (emu_to_px(prs.slide_width), emu_to_px(prs.slide_height))

    def extract_elements(self, slide) -> List[BaseElement]:
        """
        Extract the elements of one slide in stacking order (later = on top).
        Shapes are read first so connector attachments can be resolved.
        """
        shapes = list(slide.shapes)
        elements: List[Optional[BaseElement]] = [None] * len(shapes)
        kinds_by_id: Dict[str, str] = {}

        for index, shape in enumerate(shapes):
            if isinstance(shape, Connector):
                continue
            element = self._extract_shape(shape, _IDENTITY)
            if element is not None:
                elements[index] = element
                kinds_by_id[element.id] = _site_kind(element)

        for index, shape in enumerate(shapes):
            if isinstance(shape, Connector):
                elements[index] = self._extract_connector(shape, kinds_by_id, _IDENTITY)

        return [element for element in elements if element is not None]

    # ---- Shapes ----

    def _geometry(self, shape, transform: _ChildTransform) -> Tuple[float, float, float, float]:
        scale_x, scale_y, offset_x, offset_y = transform
        left = emu_to_px(shape.left or 0) * scale_x + offset_x
        top = emu_to_px(shape.top or 0) * scale_y + offset_y
        width = emu_to_px(shape.width or 0) * scale_x
        height = emu_to_px(shape.height or 0) * scale_y
        return left, top, width, height

    def _extract_shape(self, shape, transform: _ChildTransform) -> Optional[BaseElement]:
        """Convert a non-connector shape; unsupported shape types are skipped"""
        shape_id = str(shape.shape_id)
        x, y, w, h = self._geometry(shape, transform)
        shape_type = shape.shape_type

        if shape_type == MSO_SHAPE_TYPE.GROUP:
            return self._extract_group(shape, shape_id, x, y, w, h, transform)
        if shape_type == MSO_SHAPE_TYPE.PICTURE:
            return self._extract_picture(shape, shape_id, x, y, w, h)
        if shape_type in (MSO_SHAPE_TYPE.TEXT_BOX, MSO_SHAPE_TYPE.PLACEHOLDER):
            return TextElement(
                id=shape_id, x=x, y=y, w=w, h=h, name=shape.name,
                text=self._text_of(shape),
            )
        if shape_type in (MSO_SHAPE_TYPE.AUTO_SHAPE, MSO_SHAPE_TYPE.FREEFORM):
            return self._extract_auto_shape(shape, shape_id, x, y, w, h)

        if self.logger:
            self.logger.debug(f"Skipping shape {shape_id} of unsupported type {shape_type}")
        return None

    def _extract_auto_shape(self, shape, shape_id: str, x: float, y: float, w: float, h: float) -> ShapeElement:
        element = shape._element
        prst = _first(element.xpath('./p:spPr/a:prstGeom/@prst'))
        kind = map_prst_to_shape_kind(prst)
        # Keep the raw preset name for kinds outside the catalog
        shape_type = kind.value if kind != ShapeKind.UNKNOWN else (prst or 'custom')

        return ShapeElement(
            id=shape_id, x=x, y=y, w=w, h=h, name=shape.name,
            shape_type=shape_type,
            adjustments=self._extract_adjustments(element),
            text=self._text_of(shape),
            style=Style(
                stroke=self._read_color(element, './p:spPr/a:ln/a:solidFill/a:srgbClr/@val'),
                stroke_width=self._line_width_px(shape),
                fill=self._read_color(element, './p:spPr/a:solidFill/a:srgbClr/@val'),
            ),
        )

    def _extract_adjustments(self, element) -> Dict[str, float]:
        adjustments = {}
        for gd in element.xpath('./p:spPr/a:prstGeom/a:avLst/a:gd'):
            name = gd.get('name')
            fmla = (gd.get('fmla') or '').strip()
            if not name or not fmla.startswith(_ADJUST_PREFIX):
                continue
            try:
                adjustments[name] = float(fmla[len(_ADJUST_PREFIX):])
            except ValueError:
                if self.logger:
                    self.logger.debug(f"Ignoring adjust value {name}={fmla!r}")
        return adjustments

    def _extract_group(
        self, group, group_id: str, x: float, y: float, w: float, h: float, transform: _ChildTransform,
    ) -> GroupElement:
        """Group with children positioned relative to the group origin"""
        child_transform = self._child_transform(group, transform)
        children: List[BaseElement] = []
        kinds_by_id: Dict[str, str] = {}
        for child in group.shapes:
            if isinstance(child, Connector):
                continue
            element = self._extract_shape(child, child_transform)
            if element is not None:
                children.append(element)
                kinds_by_id[element.id] = _site_kind(element)
        for child in group.shapes:
            if isinstance(child, Connector):
                children.append(self._extract_connector(child, kinds_by_id, child_transform))

        return GroupElement(
            id=group_id, x=x, y=y, w=w, h=h, name=group.name,
            children=tuple(children),
        )

    def _child_transform(self, group, transform: _ChildTransform) -> _ChildTransform:
        """
        Transform from the group's child coordinate space to px relative to the
        group origin (a:chOff/a:chExt map onto a:off/a:ext)
        """
        element = group._element
        ch_off = element.xpath('./p:grpSpPr/a:xfrm/a:chOff')
        ch_ext = element.xpath('./p:grpSpPr/a:xfrm/a:chExt')
        ext = element.xpath('./p:grpSpPr/a:xfrm/a:ext')
        if not ch_off or not ch_ext or not ext:
            return (transform[0], transform[1], 0.0, 0.0)

        scale_x, scale_y = transform[0], transform[1]
        ch_cx = float(ch_ext[0].get('cx') or 0)
        ch_cy = float(ch_ext[0].get('cy') or 0)
        if ch_cx > 0:
            scale_x *= float(ext[0].get('cx') or 0) / ch_cx
        if ch_cy > 0:
            scale_y *= float(ext[0].get('cy') or 0) / ch_cy
        offset_x = -emu_to_px(int(ch_off[0].get('x') or 0)) * scale_x
        offset_y = -emu_to_px(int(ch_off[0].get('y') or 0)) * scale_y
        return (scale_x, scale_y, offset_x, offset_y)

    def _extract_picture(self, shape, shape_id: str, x: float, y: float, w: float, h: float) -> ImageElement:
        blob = None
        try:
            blob = shape.image.blob
        except Exception as e:
            if self.logger:
                self.logger.debug(f"Failed to read image data of {shape_id}: {e}")
        return ImageElement(
            id=shape_id, x=x, y=y, w=w, h=h, name=shape.name,
            description=_first(shape._element.xpath('./p:nvPicPr/p:cNvPr/@descr')) or '',
            blob=blob,
        )

    # ---- Connectors ----

    def _extract_connector(self, shape, kinds_by_id: Dict[str, str], transform: _ChildTransform) -> ConnectorElement:
        element = shape._element
        prst = _first(element.xpath('./p:spPr/a:prstGeom/@prst'))
        x, y, w, h = self._geometry(shape, transform)

        scale_x, scale_y, offset_x, offset_y = transform
        begin = Point(emu_to_px(shape.begin_x) * scale_x + offset_x, emu_to_px(shape.begin_y) * scale_y + offset_y)
        end = Point(emu_to_px(shape.end_x) * scale_x + offset_x, emu_to_px(shape.end_y) * scale_y + offset_y)

        source_id, start_site = self._read_attachment(element, 'stCxn', kinds_by_id)
        target_id, end_site = self._read_attachment(element, 'endCxn', kinds_by_id)

        return ConnectorElement(
            id=str(shape.shape_id), x=x, y=y, w=w, h=h, name=shape.name,
            source_id=source_id,
            target_id=target_id,
            start_site_name=start_site,
            end_site_name=end_site,
            connector_type=map_connector_prst(prst),
            points=(begin, end),
            style=Style(
                stroke=self._read_color(element, './p:spPr/a:ln/a:solidFill/a:srgbClr/@val'),
                stroke_width=self._line_width_px(shape),
                arrow_start=_first(element.xpath('./p:spPr/a:ln/a:headEnd/@type')),
                arrow_end=_first(element.xpath('./p:spPr/a:ln/a:tailEnd/@type')),
            ),
        )

    def _read_attachment(
        self, element, tag: str, kinds_by_id: Dict[str, str],
    ) -> Tuple[Optional[str], Optional[str]]:
        """(shape id, site name) from a:stCxn / a:endCxn, or (None, None) when unattached"""
        cxn = element.xpath(f'./p:nvCxnSpPr/p:cNvCxnSpPr/a:{tag}')
        if not cxn:
            return (None, None)
        shape_id = cxn[0].get('id')
        try:
            index = int(cxn[0].get('idx'))
        except (TypeError, ValueError):
            index = None
        site = connection_index_to_site(kinds_by_id.get(shape_id), index)
        if site is None and self.logger:
            self.logger.debug(f"Connection site {index} of shape {shape_id} has no cardinal name")
        return (shape_id, site)

    # ---- Style helpers ----

    def _read_color(self, element, xpath: str) -> Optional[RGBColor]:
        value = _first(element.xpath(xpath))
        if not value:
            return None
        try:
            return RGBColor.from_string(value)
        except ValueError:
            if self.logger:
                self.logger.debug(f"Ignoring color value {value!r}")
            return None

    def _line_width_px(self, shape) -> float:
        try:
            width = shape.line.width
        except Exception as e:
            if self.logger:
                self.logger.debug(f"Failed to read line width: {e}")
            return 1.0
        return emu_to_px(width) if width else 1.0

    @staticmethod
    def _text_of(shape) -> str:
        if not getattr(shape, 'has_text_frame', False):
            return ''
        return shape.text_frame.text
