class GraphWidgetError(Exception):
    """Base class for every error raised while laying out or drawing a widget."""


class AxisConfigError(GraphWidgetError, ValueError):
    """Axis domain, tick interval or category list cannot be laid out."""


class TickIntervalError(AxisConfigError):
    """Tick interval has no exact label representation."""


class LabelSelectionError(GraphWidgetError, ValueError):
    pass


class CanvasError(GraphWidgetError):
    """Invalid drawing arguments or misuse of a clipped region."""


class WidgetValidationError(GraphWidgetError, ValueError):
    """Widget parameters violate a semantic precondition (domain, category, fit requirements)."""
