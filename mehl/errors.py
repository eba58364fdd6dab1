
class MehlError(Exception):
    """ Base class for all Mehl errors"""
    pass

class UnboundNameError(MehlError):
    """ Raised when a name is not bound anywhere in the scope chain"""
    def __init__(self, name: str):
        super().__init__(f"Unknown name {name}.")
        self.name = name

class NoMatchError(MehlError):
    """ Raised when no pattern of a match accepts the value"""

class ArityOrShapeError(MehlError):
    """ Raised when a value does not have the shape an operation or pattern needs"""

class ForeignPrimitiveError(MehlError):
    """ Raised when a primitive is unknown or fails inside the host"""

class PanicError(MehlError):
    """ Raised by the panic primitive; carries the value it was given"""
    def __init__(self, value):
        super().__init__(f"panic: {value!r}")
        self.value = value

class ExportLevelError(MehlError, ValueError):
    """ Raised when a binding is created with a negative export level"""

class ScopeSealedError(MehlError):
    """ Raised when binding into a scope whose creating operation has returned"""

class MehlRecursionError(MehlError):
    """ Raised when invocations nest deeper than the configured limit"""

class MehlSyntaxError(MehlError):
    """ Raised when there is a syntax error"""
    def __init__(self, message: str, line: int | None = None, col: int | None = None):
        where = f" at {line}:{col}" if line is not None else ""
        super().__init__(f"{message}{where}")
        self.message = message
        self.line = line
        self.col = col
