"""Shared error types for the tool adapter."""


class AdapterError(Exception):
    """Base error for all tool adapter failures."""


# ---------------------------------------------------------------------------
# Registration time
# ---------------------------------------------------------------------------


class RegistrationError(AdapterError):
    """A command could not be turned into a tool."""


class MissingDocumentationError(RegistrationError):
    """The command, or one of its exposed parameters, has no description."""

    def __init__(self, command: str, parameter: str | None = None) -> None:
        self.command = command
        self.parameter = parameter
        if parameter is None:
            msg = f"No description is available for the command '{command}'"
        else:
            msg = f"No description is available for the parameter '{parameter}' of '{command}'"
        super().__init__(msg)


class UnsupportedShapeError(RegistrationError):
    """The command accepts more than one argument shape."""

    def __init__(self, command: str, detail: str = "") -> None:
        self.command = command
        self.detail = detail
        super().__init__(
            f"The command '{command}' has an unsupported argument shape"
            + (f": {detail}" if detail else "")
        )


class NoExportedCommandsError(RegistrationError):
    """A module exposes no commands at all."""

    def __init__(self, module: str) -> None:
        self.module = module
        super().__init__(f"The module '{module}' doesn't expose any functions.")


class DuplicateToolError(RegistrationError):
    """A tool with the same name is already registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"A tool named '{name}' is already registered")


# ---------------------------------------------------------------------------
# Invocation time
# ---------------------------------------------------------------------------


class InvocationError(AdapterError):
    """A command failed while being bound or executed."""


class CommandNotFoundError(RegistrationError, InvocationError):
    """The command cannot be resolved.

    Raised at registration time (module attribute or script missing) and at
    call time (the name no longer resolves in the session).
    """

    def __init__(self, command: str, detail: str = "") -> None:
        self.command = command
        self.detail = detail
        super().__init__(
            f"The command '{command}' cannot be found" + (f": {detail}" if detail else "")
        )


class ParameterBindingError(InvocationError):
    """An argument could not be converted or bound to the command."""

    def __init__(self, command: str, parameter: str | None, detail: str = "") -> None:
        self.command = command
        self.parameter = parameter
        self.detail = detail
        target = f"parameter '{parameter}' of '{command}'" if parameter else f"'{command}'"
        super().__init__(
            f"Cannot bind arguments to {target}" + (f": {detail}" if detail else "")
        )


class CommandFailedError(InvocationError):
    """The command raised while executing."""

    def __init__(self, command: str, detail: str = "") -> None:
        self.command = command
        self.detail = detail
        super().__init__(f"The command '{command}' failed" + (f": {detail}" if detail else ""))


class SerializationError(AdapterError):
    """A result could not be converted to JSON."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Cannot convert the result to JSON" + (f": {detail}" if detail else ""))
