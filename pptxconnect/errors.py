"""Exceptions raised by the routing engine"""


class InvalidRoutingInput(ValueError):
    """Caller passed input that violates the routing contract (missing endpoint, missing bounds, ...)"""


class GuideFormulaError(ValueError):
    """A preset guide formula uses an unknown operator or name"""
