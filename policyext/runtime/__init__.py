# policyext/runtime/__init__.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from .evaluator import Evaluator, RestrictedEvaluator

__all__ = ["Evaluator", "RestrictedEvaluator"]
