# policyext/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import List, Optional, Sequence


class PolicyExtError(Exception):
    """
    Base exception class for errors raised by the extension mechanism.
    """


class EvaluationError(PolicyExtError):
    """
    Raised when evaluating an expression fails at request time.
    """


class ExtensionEvaluationError(EvaluationError):
    """
    Raised when an extension function fails. Carries the name of the extension
    so callers can group or filter failures by extension.

    :param extension_name: Name of the extension that raised the failure.
    :param message: Human-readable description of the failure.
    """

    def __init__(self, extension_name, message: str) -> None:
        super().__init__(f"error while evaluating {extension_name} extension function: {message}")
        self.extension_name = extension_name
        self.message = message


class EvaluationTypeError(EvaluationError):
    """
    Raised when a value does not have one of the expected types.

    :param expected: The types that would have been accepted.
    :param actual: The type of the offending value.
    """

    def __init__(self, expected: Sequence, actual) -> None:
        expected_str = ", ".join(str(t) for t in expected)
        super().__init__(f"type error: expected {expected_str}, got {actual}")
        self.expected: List = list(expected)
        self.actual = actual


class WrongArityError(EvaluationError):
    """
    Raised when a function is called with the wrong number of arguments.
    """

    def __init__(self, function_name, expected: int, actual: int) -> None:
        super().__init__(f"wrong number of arguments to {function_name}: expected {expected}, got {actual}")
        self.function_name = function_name
        self.expected = expected
        self.actual = actual


class CallStyleError(EvaluationError):
    """
    Raised when a function is called with a call style it does not declare.
    """


class UnknownFunctionError(EvaluationError):
    """
    Raised when an expression calls a function that no enabled extension provides.
    """


class MissingAttributeError(EvaluationError):
    """
    Raised when an expression reads a context attribute that is not present.
    """


class U256Error(PolicyExtError):
    """
    Base class for failures converting text into a u256 value. These never reach
    callers directly; the u256 function wraps them into ExtensionEvaluationError.
    """


class FailedParse(U256Error):
    """
    Raised when the input string is not a well-formed u256 literal.
    """

    def __init__(self, text: str) -> None:
        super().__init__(f"input string is not a well-formed u256 value: {text}")
        self.text = text


class Overflow(U256Error):
    """
    Raised when a well-formed literal is larger than the largest u256 value.
    """

    def __init__(self) -> None:
        super().__init__("overflow when converting to u256")


class ExtensionRegistryError(PolicyExtError):
    """
    Raised when an extension or a set of extensions is malformed, for example
    when two functions share a name.
    """


class ExtensionInvariantError(PolicyExtError):
    """
    Raised when the runtime bridge is asked to apply a function that is not
    registered. Hosts check names before dispatch, so this indicates a defect
    in the host, not a user error.
    """


class SchemaDriftError(PolicyExtError):
    """
    Raised while building a validator schema mirror when it disagrees with the
    runtime function table of its extension.
    """


class ArgumentCheckError(PolicyExtError):
    """
    Raised by a static argument check to reject unevaluated arguments.
    The message is shown to the policy author as is.
    """


class ValidationError(PolicyExtError):
    """
    Raised when static validation of an expression reports errors.

    :param results: The diagnostics collected during validation.
    """

    def __init__(self, message: str, results: Optional[list] = None) -> None:
        super().__init__(message)
        self.results = list(results or [])
