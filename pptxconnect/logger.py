"""
Logging and diagnostics module

Records degraded-routing conditions (best-effort routes, unknown shape kinds,
unresolved connection sites) as structured warnings and forwards them to the
standard logging system
"""
import logging
from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field


@dataclass
class RoutingWarning:
    """Warning raised while routing"""
    element_id: Optional[str]
    warning_type: str  # 'best_effort_route', 'unknown_shape_kind', 'site_not_found', etc.
    message: str
    details: Dict[str, Any] = field(default_factory=dict)


class RoutingLogger:
    """Logger for the routing engine"""

    def __init__(self, record_warnings: bool = True):
        """
        Args:
            record_warnings: Whether to keep warnings in memory for later inspection
        """
        self.record_warnings = record_warnings
        self.warnings: List[RoutingWarning] = []
        self.logger = logging.getLogger('pptxconnect')

        # Logger configuration (default)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def _record(self, warning: RoutingWarning, level: int = logging.WARNING):
        if self.record_warnings:
            self.warnings.append(warning)
        self.logger.log(level, f"[{warning.element_id}] {warning.message}")

    def warn_best_effort_route(self, connector_id: Optional[str], start_id: str, end_id: str, candidates_tried: int):
        """Record that no candidate was collision-free and the fallback route was used"""
        message = (
            f"No collision-free route between {start_id} and {end_id} "
            f"({candidates_tried} candidates); using best-effort route"
        )
        self._record(RoutingWarning(
            element_id=connector_id,
            warning_type='best_effort_route',
            message=message,
            details={
                'start_id': start_id,
                'end_id': end_id,
                'candidates_tried': candidates_tried,
            }
        ))

    def warn_unknown_shape_kind(self, element_id: Optional[str], shape_kind: Optional[str]):
        """Record that a shape kind was not in the catalog (rectangle sites are used)"""
        message = f"Unknown shape kind: {shape_kind!r} (using rectangle connection sites)"
        self._record(RoutingWarning(
            element_id=element_id,
            warning_type='unknown_shape_kind',
            message=message,
            details={'shape_kind': shape_kind}
        ), level=logging.DEBUG)

    def warn_site_not_found(self, element_id: Optional[str], site_name: str):
        """Record that a requested connection site did not resolve"""
        message = f"Connection site not found: {site_name!r} (using automatic selection)"
        self._record(RoutingWarning(
            element_id=element_id,
            warning_type='site_not_found',
            message=message,
            details={'site_name': site_name}
        ))

    def info(self, message: str):
        """Info log"""
        self.logger.info(message)

    def debug(self, message: str):
        """Debug log"""
        self.logger.debug(message)

    def warning(self, message: str):
        """Warning log"""
        self.logger.warning(message)

    def error(self, message: str):
        """Error log"""
        self.logger.error(message)

    def get_warnings(self, warning_type: Optional[str] = None) -> List[RoutingWarning]:
        """Get warning list, optionally filtered by type"""
        if warning_type is None:
            return list(self.warnings)
        return [w for w in self.warnings if w.warning_type == warning_type]

    def clear_warnings(self):
        """Clear warning list"""
        self.warnings.clear()


# Global logger instance (forwards to logging, keeps no warnings)
_default_logger = RoutingLogger(record_warnings=False)


def get_logger() -> RoutingLogger:
    """Get default logger"""
    return _default_logger
