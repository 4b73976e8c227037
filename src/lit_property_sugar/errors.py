"""Error taxonomy for property enhancement."""

from __future__ import annotations

from .model import SourceLocation


class EnhanceError(Exception):
    """A fatal failure for the current compilation unit.

    Carries the error ``kind``, the fixed ``message`` text and the
    ``location`` of the offending member or decorator.
    """

    kind = "EnhanceError"

    def __init__(self, message: str, location: SourceLocation | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.location = location

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, {self.location!r})"

    def code_frame(self, source: str, filename: str | None = None, context: int = 2) -> str:
        """Render the error with the surrounding source lines.

        The offending line is marked with ``>`` and a caret under the
        column::

            element.ts: Could not determine the type ...
              3 |   @property()
            > 4 |   myField;
                |   ^
        """
        header = f"{filename}: {self.message}" if filename else self.message
        if self.location is None:
            return header

        lines = source.splitlines()
        target = self.location.line
        first = max(1, target - context)
        last = min(len(lines), target + context)
        width = len(str(last))

        out = [header]
        for lineno in range(first, last + 1):
            text = lines[lineno - 1]
            marker = ">" if lineno == target else " "
            out.append(f"{marker} {lineno:>{width}} | {text}".rstrip())
            if lineno == target:
                out.append(f"  {'':>{width}} | {' ' * self.location.column}^")
        return "\n".join(out)


class InvalidArgumentCount(EnhanceError):
    kind = "InvalidArgumentCount"

    def __init__(
        self, message: str, count: int, location: SourceLocation | None = None
    ) -> None:
        super().__init__(message, location)
        self.count = count


class InvalidArgumentKind(EnhanceError):
    kind = "InvalidArgumentKind"


class TypeInferenceError(EnhanceError):
    kind = "TypeInferenceError"


class SourceSyntaxError(EnhanceError):
    kind = "SyntaxError"


# ---------------------------------------------------------------------------
# Builders (message text is fixed; snapshot consumers depend on it)
# ---------------------------------------------------------------------------

def invalid_argument_count(
    name: str, count: int, location: SourceLocation | None = None
) -> InvalidArgumentCount:
    return InvalidArgumentCount(
        f"Expected @{name} decorator to have at most 1 argument, but found {count}",
        count,
        location,
    )


def type_inference_error(
    name: str, location: SourceLocation | None = None
) -> TypeInferenceError:
    return TypeInferenceError(
        f"Could not determine the type for this @{name} decorated field, "
        "please explicity add a type",
        location,
    )


def invalid_argument_kind(
    name: str, location: SourceLocation | None = None
) -> InvalidArgumentKind:
    return InvalidArgumentKind(
        f"Expected @{name} decorator argument to be an object literal",
        location,
    )


def syntax_error(location: SourceLocation | None = None) -> SourceSyntaxError:
    return SourceSyntaxError("Unable to parse source: syntax error", location)
