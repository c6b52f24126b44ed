# policyext/extensions/__init__.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from .registry import Extensions

__all__ = ["Extensions"]
