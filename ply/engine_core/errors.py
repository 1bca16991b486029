"""Engine exceptions."""


class EngineError(Exception):
    """Base class for engine errors."""


class IllegalActionError(EngineError, ValueError):
    """
    An action was applied outside allowed_actions(state),
    or a game received an action type it does not know.
    """

    def __init__(self, action, state=None, reason: str | None = None):
        self.action = action
        self.state = state
        message = reason or f"Action {action} is not allowed"
        if state is not None and reason is None:
            message = f"{message} in state: {state}"
        super().__init__(message)
