"""policyext: extension value types for a policy expression language

This package lets the policy language acquire new scalar value types without
changing its evaluator or its static typechecker.

Responsibilities:
    - Extension value definition, construction and comparison
    - Extension function tables with call style and declared types
    - Runtime dispatch of extension calls during evaluation
    - Validator-side schema mirrors of the runtime function tables
    - Static checks of literal constructor arguments

Interactions:
    - Host evaluators through the Extensions registry
    - Host validators through the ExtensionSchemas registry
    - Logging system for diagnostics

Cross-cutting Concerns:
    Thread Safety:
        - Registries, schemas and values are immutable after construction
        - No locks are needed to share them between threads

    Error Handling:
        - Structured error hierarchy rooted at PolicyExtError
        - Runtime failures are scoped to the extension that raised them
        - Schema drift aborts construction instead of surfacing per request

    Logging:
        - Module-level loggers, DEBUG only
        - No handlers configured by the library
"""

__version__ = "0.1.0"
