# policyext/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Callable, Dict, NamedTuple, Sequence


class ValidationResult(NamedTuple):
    severity: str
    message: str
    context: Dict[str, Any]


# Callback Types
ExtensionFunctionImpl = Callable[..., Any]
ArgumentCheckFn = Callable[[Sequence[Any]], None]
