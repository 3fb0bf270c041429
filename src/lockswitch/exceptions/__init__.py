"""
Custom exception hierarchy for lockswitch.

## Exception Hierarchy

```
LockSwitchError (base)
├── CallbackError
│   ├── ReturnValueError
│   └── OnceCallbackAlreadyCalled
├── KeyboardError
│   ├── AutoReloaderError
│   ├── KeyStateCouldNotBeChangedError
│   ├── KeyStatusNotFoundError
│   ├── StatusParseError
│   └── UnknownKeyError
├── SystemCommandError
│   ├── ExecError
│   └── PathError
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

All custom exceptions inherit from `LockSwitchError`, which provides:

- `user_message`: Human-friendly message for display to users
- `technical_message`: Detailed message for logging
- `recoverable`: Whether the error can be recovered from
- `recovery_hint`: Optional suggestion for how to fix the issue

### Example: Key State

```python
from lockswitch.exceptions import KeyStateCouldNotBeChangedError

raise KeyStateCouldNotBeChangedError("Num Lock", True, attempts=10)

# User sees: "Num Lock could not be turned on"
```

Callback errors (`CallbackError` and subclasses) are programming errors and
are never caught by the library. `KeyStateCouldNotBeChangedError` is the one
runtime condition a UI is expected to show to users.
"""

from .base import LockSwitchError
from .callbacks import CallbackError, OnceCallbackAlreadyCalled, ReturnValueError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .handlers import format_error_for_display, wrap_pydantic_error
from .keyboard import (
    AutoReloaderError,
    KeyboardError,
    KeyStateCouldNotBeChangedError,
    KeyStatusNotFoundError,
    StatusParseError,
    UnknownKeyError,
)
from .system import ExecError, PathError, SystemCommandError

__all__ = [
    "AutoReloaderError",
    # Callbacks
    "CallbackError",
    "ConfigFileInvalidError",
    "ConfigValidationError",
    # Config
    "ConfigurationError",
    "ExecError",
    # Keyboard
    "KeyboardError",
    "KeyStateCouldNotBeChangedError",
    "KeyStatusNotFoundError",
    # Base
    "LockSwitchError",
    "OnceCallbackAlreadyCalled",
    "PathError",
    "ReturnValueError",
    "StatusParseError",
    # System
    "SystemCommandError",
    "UnknownKeyError",
    # Handlers
    "format_error_for_display",
    "wrap_pydantic_error",
]
