"""Errors raised while building a simulation."""


class ConstructionError(ValueError):
    """A simulation could not be built from the given configuration."""

    def __init__(self, parameter, value, reason):
        self.parameter = parameter
        self.value = value
        self.reason = reason
        super().__init__(f"{parameter}={value!r}: {reason}")


class AngleOutOfRangeError(ConstructionError):
    pass


class NonPositiveParameterError(ConstructionError):
    pass


class InitialStateFormatError(ValueError):
    """A line of an initial-state file could not be parsed."""

    def __init__(self, lineno, line, reason):
        self.lineno = lineno
        self.line = line
        self.reason = reason
        super().__init__(f"line {lineno}: {reason} ({line.strip()!r})")
