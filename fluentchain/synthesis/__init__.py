"""Installing synthesized members onto targets.

- installer: the property-map layer (install / uninstall / lookups)
- validators: type validation and encasing wrappers
- synthesizer: the one-shot MethodChain materialization (imported directly
  by `fluentchain.chain.method_chain`)
"""

from .installer import (
    InstallError,
    install,
    uninstall,
    get_own_descriptor,
    has_own_property,
    installed_names,
)
from .validators import (
    TypeValidationError,
    TraversableValidator,
    build_validator,
    schema_factory,
    validator_method_factory,
    method_encasing_factory,
)

__all__ = [
    # Installer
    "InstallError",
    "install",
    "uninstall",
    "get_own_descriptor",
    "has_own_property",
    "installed_names",
    # Validators
    "TypeValidationError",
    "TraversableValidator",
    "build_validator",
    "schema_factory",
    "validator_method_factory",
    "method_encasing_factory",
]
