"""
Guide formula evaluator

Evaluates the guide formulas of preset shape definitions (the ``gdLst``
language of DrawingML): each formula is an operator followed by operands,
where an operand is either a number or the name of a previously defined guide
"""
import math
from typing import Dict, Optional

from ..errors import GuideFormulaError


def _pin(lo: float, val: float, hi: float) -> float:
    if val < lo:
        return lo
    if val > hi:
        return hi
    return val


def _ratio(a: float, b: float, c: float) -> float:
    return a * b / c if c else 0.0


def _sum_ratio(a: float, b: float, c: float) -> float:
    return (a + b) / c if c else 0.0


# operator -> (arity, function)
_OPERATORS = {
    "val": (1, lambda a: a),
    "*/": (3, _ratio),
    "+-": (3, lambda a, b, c: a + b - c),
    "+/": (3, _sum_ratio),
    "?:": (3, lambda a, b, c: b if a > 0 else c),
    "abs": (1, abs),
    "sqrt": (1, lambda a: math.sqrt(a) if a > 0 else 0.0),
    "min": (2, min),
    "max": (2, max),
    "pin": (3, _pin),
    "mod": (3, lambda a, b, c: math.sqrt(a * a + b * b + c * c)),
}


class GuideEvaluator:
    """Evaluate guide formulas for one shape instance of size width x height"""

    def __init__(self, width: float, height: float, adjustments: Optional[Dict[str, float]] = None):
        """
        Args:
            width: Shape width in px
            height: Shape height in px
            adjustments: Adjust values (``adj``, ``adj1``...) already merged with preset defaults
        """
        ss = min(width, height)
        self.variables: Dict[str, float] = {
            "w": width,
            "h": height,
            "l": 0.0,
            "t": 0.0,
            "r": width,
            "b": height,
            "hc": width / 2.0,
            "vc": height / 2.0,
            "wd2": width / 2.0,
            "hd2": height / 2.0,
            "wd4": width / 4.0,
            "hd4": height / 4.0,
            "ss": ss,
            "ssd2": ss / 2.0,
            "ssd4": ss / 4.0,
        }
        for name, value in (adjustments or {}).items():
            self.variables[name] = float(value)

    def _operand(self, token: str) -> float:
        if token in self.variables:
            return self.variables[token]
        try:
            return float(token)
        except ValueError:
            raise GuideFormulaError(f"Unknown guide name: {token!r}") from None

    def evaluate(self, formula: str) -> float:
        """
        Evaluate a formula. A single token is a guide name or a literal.

        Raises:
            GuideFormulaError: unknown operator, unknown name or wrong operand count
        """
        tokens = formula.split()
        if not tokens:
            raise GuideFormulaError("Empty guide formula")
        if len(tokens) == 1:
            return self._operand(tokens[0])
        op, args = tokens[0], tokens[1:]
        if op not in _OPERATORS:
            raise GuideFormulaError(f"Unknown guide operator {op!r} in {formula!r}")
        arity, fn = _OPERATORS[op]
        if len(args) != arity:
            raise GuideFormulaError(f"Operator {op!r} takes {arity} operands, got {len(args)} in {formula!r}")
        return float(fn(*(self._operand(a) for a in args)))

    def add_guide(self, name: str, formula: str) -> float:
        value = self.evaluate(formula)
        self.variables[name] = value
        return value
