# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Contract-to-proxy synthesis.

This subpackage turns a contract class into a working proxy class:

- interpreter: classifies parameters into roles and applies them per call
- returns: decides how the return value is read from the response
- planner: composes both into an executable AssemblyPlan per method
- introspection: derives the ServiceContract from a decorated class
- synthesizer: realizes a ServiceContract as a generated proxy class
"""

from .base import ServiceProxyBase
from .interpreter import RequestAssembly, apply_binding, interpret_parameter, to_text
from .introspection import contract_full_name, describe_contract
from .planner import AssemblyPlan, join_route, plan_method
from .returns import extract_return, plan_return, unwrap_awaitable
from .synthesizer import ProxySynthesizer, render_plan

__all__ = [
    "AssemblyPlan",
    "ProxySynthesizer",
    "RequestAssembly",
    "ServiceProxyBase",
    "apply_binding",
    "contract_full_name",
    "describe_contract",
    "extract_return",
    "interpret_parameter",
    "join_route",
    "plan_method",
    "plan_return",
    "render_plan",
    "to_text",
    "unwrap_awaitable",
]
