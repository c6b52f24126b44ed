# policyext/validator/__init__.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from .schemas import ExtensionSchemas
from .validation import ValidationSeverity, Validator

__all__ = ["ExtensionSchemas", "ValidationSeverity", "Validator"]
