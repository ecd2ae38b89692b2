class WorkoutEngineError(Exception):
    """Base class for errors raised by the plan engine."""


class CatalogUnavailableError(WorkoutEngineError):
    """The exercise catalog could not be loaded; no plan can be produced."""
